from datetime import datetime
import logging

from constants import (
    BILLING_PERIOD_DAYS,
    DEFAULT_UPCOMING_WINDOW_DAYS,
    STATUS_DEBT,
    SEVERITY_CRITICAL,
    SEVERITY_HIGH,
    SEVERITY_MEDIUM,
    SEVERITY_LOW,
    CRITICAL_MONTHS_THRESHOLD,
    HIGH_MONTHS_THRESHOLD,
    NOTIFICATION_OVERDUE,
    NOTIFICATION_UPCOMING,
)
from logic.payment_status import get_tenant_payment_status
from utils.date_utils import parse_date, normalize_now, to_midnight, elapsed_days, add_days
from utils.payment_utils import payments_for_tenant, payment_due_anchor, is_active_tenant

# Set up a module-level logger
log = logging.getLogger(__name__)

def _empty_notifications() -> dict:
    return {'overdue': [], 'upcoming': [], 'total': 0, 'overdueCount': 0, 'criticalCount': 0}

def _severity_for_months(months: int) -> str:
    if months >= CRITICAL_MONTHS_THRESHOLD:
        return SEVERITY_CRITICAL
    if months >= HIGH_MONTHS_THRESHOLD:
        return SEVERITY_HIGH
    return SEVERITY_MEDIUM

def get_next_due_date(tenant: dict, tenant_payments: list) -> datetime:
    """
    The due date of the tenant's current billing period: the latest dueDate (or payment date when a payment
    has no dueDate) across its payments, or one period after entry when nothing has been paid yet.
    """
    if not tenant_payments:
        entry_date = parse_date(tenant.get('entryDate'), 'entryDate', tenant.get('id'))
        return add_days(entry_date, BILLING_PERIOD_DAYS)

    return max(
        parse_date(
            payment_due_anchor(payment),
            'dueDate' if payment.get('dueDate') else 'date',
            payment.get('id'),
        )
        for payment in tenant_payments
    )

def build_notifications(tenants: list, payments: list, now: datetime, window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS) -> dict:
    """
    Builds the payment alerts for a set of tenants as of `now`.
    Active tenants in debt become 'overdue' entries; tenants whose next due date falls within
    `window_days` become 'upcoming' entries. Inactive tenants are ignored.
    Returns {'overdue', 'upcoming', 'total', 'overdueCount', 'criticalCount'}.
    """
    if tenants is None or payments is None:
        return _empty_notifications()

    now = normalize_now(now)
    today = to_midnight(now)
    overdue = []
    upcoming = []

    for tenant in tenants:
        if not is_active_tenant(tenant):
            continue

        tenant_id = tenant.get('id')
        tenant_name = tenant.get('name', '')
        status = get_tenant_payment_status(tenant, payments, now)
        next_due_date = get_next_due_date(tenant, payments_for_tenant(payments, tenant_id))
        days_pending = elapsed_days(to_midnight(next_due_date), today)

        if status['status'] == STATUS_DEBT:
            months = status['months']
            overdue.append({
                'id': tenant_id,
                'type': NOTIFICATION_OVERDUE,
                'tenantName': tenant_name,
                'roomNumber': tenant.get('roomNumber'),
                'propertyId': tenant.get('propertyId'),
                'daysPending': abs(days_pending),
                'monthsPending': months,
                'amount': tenant.get('rentAmount'),
                'message': f"{tenant_name} is {months} month(s) behind on rent",
                'severity': _severity_for_months(months),
            })
            continue

        days_until_due = -days_pending
        if 0 < days_until_due <= window_days:
            upcoming.append({
                'id': tenant_id,
                'type': NOTIFICATION_UPCOMING,
                'tenantName': tenant_name,
                'roomNumber': tenant.get('roomNumber'),
                'propertyId': tenant.get('propertyId'),
                'daysRemaining': days_until_due,
                'amount': tenant.get('rentAmount'),
                'message': f"{tenant_name}'s rent is due in {days_until_due} day(s)",
                'severity': SEVERITY_LOW,
            })

    overdue.sort(key=lambda entry: entry['monthsPending'], reverse=True)
    upcoming.sort(key=lambda entry: entry['daysRemaining'])

    log.info(f"Built {len(overdue)} overdue and {len(upcoming)} upcoming notifications.")
    return {
        'overdue': overdue,
        'upcoming': upcoming,
        'total': len(overdue) + len(upcoming),
        'overdueCount': len(overdue),
        'criticalCount': sum(1 for entry in overdue if entry['severity'] == SEVERITY_CRITICAL),
    }
