from datetime import datetime
import logging

from constants import (
    BILLING_PERIOD_DAYS,
    STATUS_NO_PAYMENTS,
    STATUS_UP_TO_DATE,
    STATUS_DEBT,
)
from utils.date_utils import parse_date, normalize_now, to_midnight, elapsed_days
from utils.payment_utils import payments_for_tenant, is_active_tenant

log = logging.getLogger(__name__)

def get_tenant_payment_status(tenant: dict, payments: list, now: datetime) -> dict:
    """
    Classifies a tenant's payment standing as of `now`.
    Returns a dictionary with 'status' (noPayments, upToDate or debt), 'months' (fully elapsed unpaid
    30-day periods) and 'lastPayment' (datetime of the latest payment, or None).
    Raises InvalidDateError if the tenant's entryDate or any of its payment dates is malformed.
    """
    now = normalize_now(now)
    tenant_id = tenant.get('id')
    entry_date = parse_date(tenant.get('entryDate'), 'entryDate', tenant_id)
    tenant_payments = payments_for_tenant(payments, tenant_id)

    if not tenant_payments:
        # The first payment is due one full period after the lease starts
        days_since_entry = elapsed_days(to_midnight(entry_date), to_midnight(now))
        if days_since_entry <= BILLING_PERIOD_DAYS:
            return {'status': STATUS_NO_PAYMENTS, 'months': 0, 'lastPayment': None}
        return {'status': STATUS_DEBT, 'months': days_since_entry // BILLING_PERIOD_DAYS, 'lastPayment': None}

    last_payment_date = max(
        parse_date(payment.get('date'), 'date', payment.get('id'))
        for payment in tenant_payments
    )
    days_since_payment = elapsed_days(last_payment_date, now)

    if days_since_payment <= BILLING_PERIOD_DAYS:
        return {'status': STATUS_UP_TO_DATE, 'months': 0, 'lastPayment': last_payment_date}

    months = days_since_payment // BILLING_PERIOD_DAYS
    log.debug(f"Tenant {tenant_id} is {months} period(s) behind, last paid {last_payment_date.date()}")
    return {'status': STATUS_DEBT, 'months': months, 'lastPayment': last_payment_date}

def get_debtors(tenants: list, payments: list, now: datetime) -> dict:
    """
    Lists active tenants in arrears, most months owed first, with the total amount owed.
    """
    now = normalize_now(now)
    debtors = []
    for tenant in tenants or []:
        if not is_active_tenant(tenant):
            continue
        status = get_tenant_payment_status(tenant, payments or [], now)
        if status['status'] != STATUS_DEBT:
            continue

        rent_amount = tenant.get('rentAmount') or 0
        last_payment = status['lastPayment']
        debtors.append({
            'id': tenant.get('id'),
            'tenantName': tenant.get('name', ''),
            'phone': tenant.get('phone'),
            'roomNumber': tenant.get('roomNumber'),
            'propertyId': tenant.get('propertyId'),
            'rentAmount': rent_amount,
            'months': status['months'],
            'debtAmount': rent_amount * status['months'],
            'lastPayment': last_payment.isoformat() if last_payment else None,
        })

    debtors.sort(key=lambda debtor: debtor['months'], reverse=True)
    return {
        'debtors': debtors,
        'count': len(debtors),
        'totalDebt': sum(debtor['debtAmount'] for debtor in debtors),
    }
