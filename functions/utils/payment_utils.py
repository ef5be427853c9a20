import logging

from constants import ACTIVE_CONTRACT_STATUSES, FINISHED_CONTRACT_STATUSES, OWNER_FIELD

log = logging.getLogger(__name__)

def payments_for_tenant(payments: list, tenant_id: str) -> list:
    """
    Returns the payments recorded against the given tenant id.
    """
    return [payment for payment in payments if payment.get('tenantId') == tenant_id]

def payment_due_anchor(payment: dict):
    """
    The date a payment's billing period is anchored to: its dueDate, or the payment date when no dueDate was recorded.
    """
    return payment.get('dueDate') or payment.get('date')

def is_active_tenant(tenant: dict) -> bool:
    """
    True for an active contract. Finished contracts are inactive; any other status is logged and treated as inactive.
    """
    contract_status = tenant.get('contractStatus')
    if contract_status in ACTIVE_CONTRACT_STATUSES:
        return True
    if contract_status not in FINISHED_CONTRACT_STATUSES:
        log.warning(f"Tenant {tenant.get('id')} has unknown contractStatus {contract_status!r}. Treating as inactive.")
    return False

def group_by_owner(records: list) -> dict:
    """
    Groups tenant or payment records by the owning user's id.
    Returns a dictionary where keys are owner ids and values are lists of records.
    """
    grouped = {}
    for record in records:
        owner_id = record.get(OWNER_FIELD)
        if not owner_id:
            log.warning(f"Record {record.get('id')} has no {OWNER_FIELD}. Skipping.")
            continue
        grouped.setdefault(owner_id, []).append(record)
    return grouped
