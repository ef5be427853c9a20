import os

# Firestore collections
TENANTS_COLLECTION = 'tenants'
PAYMENTS_COLLECTION = 'payments'
OWNER_FIELD = 'userId'

APP_TIMEZONE = os.environ.get('APP_TIMEZONE', 'America/Argentina/Buenos_Aires')

# Contract status values; the SPA stores the Spanish ones
ACTIVE_CONTRACT_STATUSES = ('active', 'activo')
FINISHED_CONTRACT_STATUSES = ('finished', 'finalizado')

# Payment status values
STATUS_NO_PAYMENTS = 'noPayments'
STATUS_UP_TO_DATE = 'upToDate'
STATUS_DEBT = 'debt'

# Billing periods are fixed 30-day windows, not calendar months
BILLING_PERIOD_DAYS = 30
DEFAULT_UPCOMING_WINDOW_DAYS = 7

# Severity tiers
SEVERITY_CRITICAL = 'critical'
SEVERITY_HIGH = 'high'
SEVERITY_MEDIUM = 'medium'
SEVERITY_LOW = 'low'
CRITICAL_MONTHS_THRESHOLD = 3
HIGH_MONTHS_THRESHOLD = 2

NOTIFICATION_OVERDUE = 'overdue'
NOTIFICATION_UPCOMING = 'upcoming'
