from firebase_functions import scheduler_fn, https_fn
from firebase_functions.options import set_global_options
from firebase_admin import initialize_app
import firebase_admin
import json
import logging
import os

from constants import APP_TIMEZONE, DEFAULT_UPCOMING_WINDOW_DAYS
from services.db_service import get_tenants, get_payments, get_owner_email
from services.cloud_tasks_service import enqueue_owner_alert_tasks
from services.email_service import send_owner_alert_email
from logic.notification_logic import build_notifications
from logic.payment_status import get_tenant_payment_status, get_debtors
from utils.date_utils import InvalidDateError, current_time
from utils.payment_utils import group_by_owner
from utils.template_renderer import template_env


# Set up a module-level logger
log = logging.getLogger(__name__)

try:
    firebase_admin.get_app()
except ValueError:
    initialize_app()
set_global_options(max_instances=1)


def _json_response(payload: dict, status: int = 200) -> https_fn.Response:
    return https_fn.Response(json.dumps(payload), status=status, headers={"Content-Type": "application/json"})


def _upcoming_window_days() -> int:
    configured = os.environ.get('UPCOMING_WINDOW_DAYS')
    if not configured:
        return DEFAULT_UPCOMING_WINDOW_DAYS
    try:
        return int(configured)
    except ValueError:
        log.warning(f"Invalid UPCOMING_WINDOW_DAYS {configured!r}, using {DEFAULT_UPCOMING_WINDOW_DAYS}.")
        return DEFAULT_UPCOMING_WINDOW_DAYS


def collect_owner_alerts(tenants: list, payments: list, now, window_days: int) -> list:
    """
    Builds each owner's notifications and returns the alert payloads for owners with at least one entry.
    Owners whose records hold an invalid date, or who have no e-mail on file, are logged and skipped.
    """
    tenants_by_owner = group_by_owner(tenants)
    payments_by_owner = group_by_owner(payments)
    owner_alerts = []

    for owner_id, owner_tenants in tenants_by_owner.items():
        try:
            notifications = build_notifications(owner_tenants, payments_by_owner.get(owner_id, []), now, window_days)
        except InvalidDateError as e:
            log.error(f"Skipping alerts for owner {owner_id}: {e}")
            continue

        if not notifications['total']:
            log.info(f"No payment alerts for owner {owner_id}.")
            continue

        try:
            owner_email = get_owner_email(owner_id)
        except Exception as e:
            log.error(f"Skipping alerts for owner {owner_id}, email lookup failed: {e}")
            continue
        if not owner_email:
            log.warning(f"No email found for owner {owner_id}. Skipping {notifications['total']} alert(s).")
            continue

        owner_alerts.append({
            'owner_id': owner_id,
            'owner_email': owner_email,
            'notifications': notifications,
        })
    return owner_alerts


@scheduler_fn.on_schedule(
    schedule="0 8 * * *",
    timezone=scheduler_fn.Timezone(APP_TIMEZONE),
)
def daily_payment_alerts(event: scheduler_fn.ScheduledEvent) -> None:
    """
    Scheduled function that e-mails every owner their overdue and upcoming rent payments.
    """
    log.info("Starting daily payment alerts.")
    window_days = _upcoming_window_days()

    tenants = get_tenants()
    payments = get_payments()

    if not tenants:
        log.info("No tenants found in the database. Exiting.")
        return

    owner_alerts = collect_owner_alerts(tenants, payments, current_time(), window_days)
    if owner_alerts:
        log.info(f"Found {len(owner_alerts)} owners with payment alerts:")
        enqueue_owner_alert_tasks(owner_alerts)
        for owner_alert in owner_alerts:
            notifications = owner_alert['notifications']
            log.info(f"  - Enqueued alert for owner {owner_alert['owner_id']}: {notifications['overdueCount']} overdue, {len(notifications['upcoming'])} upcoming")
    else:
        log.info("No owners with payment alerts today.")


@https_fn.on_request()
def send_owner_alert_worker(req: https_fn.Request) -> https_fn.Response:
    """
    HTTP-triggered function that receives one owner's notifications and sends the alert email.
    """
    owner_alert = req.get_json(silent=True)
    if not owner_alert:
        log.error("No owner alert data in request body.")
        return https_fn.Response("No data received", status=400)

    owner_email = owner_alert.get('owner_email')
    notifications = owner_alert.get('notifications')
    if not owner_email or not notifications:
        log.error(f"Incomplete alert payload for owner {owner_alert.get('owner_id', 'UNKNOWN_OWNER')}.")
        return https_fn.Response("Missing owner_email or notifications.", status=400)

    success = send_owner_alert_email(owner_email, notifications, template_env)

    if success:
        return https_fn.Response("Email sent successfully.", status=200)
    else:
        return https_fn.Response("Failed to send email.", status=500)


@https_fn.on_request()
def get_notifications(req: https_fn.Request) -> https_fn.Response:
    """
    HTTP-triggered function returning the overdue and upcoming payment notifications of one owner.
    Query parameters: userId (required), windowDays (optional, defaults to UPCOMING_WINDOW_DAYS).
    """
    user_id = req.args.get('userId')
    if not user_id:
        log.error("Missing userId query parameter for get_notifications.")
        return https_fn.Response("Missing userId.", status=400)

    window_days = _upcoming_window_days()
    if req.args.get('windowDays'):
        try:
            window_days = int(req.args.get('windowDays'))
        except ValueError:
            return https_fn.Response("windowDays must be an integer.", status=400)

    try:
        notifications = build_notifications(get_tenants(user_id), get_payments(user_id), current_time(), window_days)
        return _json_response(notifications)
    except InvalidDateError as e:
        log.error(f"Invalid date while building notifications for {user_id}: {e}")
        return https_fn.Response(str(e), status=422)
    except Exception as e:
        log.error(f"Error in get_notifications for {user_id}: {e}")
        return https_fn.Response("An error occurred.", status=500)


@https_fn.on_request()
def get_tenant_status(req: https_fn.Request) -> https_fn.Response:
    """
    HTTP-triggered function returning the payment status of one tenant.
    Query parameters: userId and tenantId.
    """
    user_id = req.args.get('userId')
    tenant_id = req.args.get('tenantId')
    if not user_id or not tenant_id:
        log.error("Missing userId or tenantId query parameters for get_tenant_status.")
        return https_fn.Response("Missing identifiers.", status=400)

    try:
        tenant = next((t for t in get_tenants(user_id) if t.get('id') == tenant_id), None)
        if not tenant:
            log.warning(f"Tenant {tenant_id} not found for owner {user_id}.")
            return https_fn.Response("Tenant not found.", status=404)

        status = get_tenant_payment_status(tenant, get_payments(user_id), current_time())
        last_payment = status['lastPayment']
        return _json_response({
            'tenantId': tenant_id,
            'status': status['status'],
            'months': status['months'],
            'lastPayment': last_payment.isoformat() if last_payment else None,
        })
    except InvalidDateError as e:
        log.error(f"Invalid date while evaluating tenant {tenant_id}: {e}")
        return https_fn.Response(str(e), status=422)
    except Exception as e:
        log.error(f"Error in get_tenant_status for tenant {tenant_id}: {e}")
        return https_fn.Response("An error occurred.", status=500)


@https_fn.on_request()
def get_debtors_report(req: https_fn.Request) -> https_fn.Response:
    """
    HTTP-triggered function returning one owner's active tenants in arrears and the total owed.
    """
    user_id = req.args.get('userId')
    if not user_id:
        log.error("Missing userId query parameter for get_debtors_report.")
        return https_fn.Response("Missing userId.", status=400)

    try:
        return _json_response(get_debtors(get_tenants(user_id), get_payments(user_id), current_time()))
    except InvalidDateError as e:
        log.error(f"Invalid date while listing debtors for {user_id}: {e}")
        return https_fn.Response(str(e), status=422)
    except Exception as e:
        log.error(f"Error in get_debtors_report for {user_id}: {e}")
        return https_fn.Response("An error occurred.", status=500)
