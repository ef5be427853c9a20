from datetime import datetime

OWNER_A = "owner-a-uid"
OWNER_B = "owner-b-uid"

# 15/11/2023 09:00 in the app timezone
NOW = datetime(2023, 11, 15, 9, 0)

TENANTS = [
    {
        "id": "tenant-current",
        "userId": OWNER_A,
        "name": "Lucia Fernandez",
        "phone": "+5491155550101",
        "entryDate": "2023-09-01",
        "rentAmount": 100000,
        "contractStatus": "activo",
        "roomNumber": "1A",
        "propertyId": "property-1",
    },
    {
        "id": "tenant-debt",
        "userId": OWNER_A,
        "name": "Martin Gomez",
        "phone": "+5491155550102",
        "entryDate": "2023-06-01",
        "rentAmount": 90000,
        "contractStatus": "activo",
        "roomNumber": "2B",
        "propertyId": "property-1",
    },
    {
        "id": "tenant-finished",
        "userId": OWNER_A,
        "name": "Sofia Ruiz",
        "phone": "+5491155550103",
        "entryDate": "2023-01-01",
        "rentAmount": 80000,
        "contractStatus": "finalizado",
        "roomNumber": "3C",
        "propertyId": "property-2",
    },
    {
        "id": "tenant-new",
        "userId": OWNER_B,
        "name": "Diego Alvarez",
        "phone": "+5491155550104",
        "entryDate": "2023-11-01",
        "rentAmount": 120000,
        "contractStatus": "active",
        "roomNumber": "4D",
        "propertyId": "property-3",
    },
]

PAYMENTS = [
    {
        "id": "payment-current-oct",
        "userId": OWNER_A,
        "tenantId": "tenant-current",
        "amount": 100000,
        "date": "2023-10-20T10:00:00",
        "dueDate": "2023-11-19",
    },
    {
        "id": "payment-current-sep",
        "userId": OWNER_A,
        "tenantId": "tenant-current",
        "amount": 100000,
        "date": "2023-09-28T12:00:00",
        "dueDate": "2023-10-20",
    },
    {
        "id": "payment-debt-aug",
        "userId": OWNER_A,
        "tenantId": "tenant-debt",
        "amount": 90000,
        "date": "2023-08-01",
        "dueDate": "2023-08-31",
    },
    {
        "id": "payment-finished",
        "userId": OWNER_A,
        "tenantId": "tenant-finished",
        "amount": 80000,
        "date": "2023-02-01",
    },
]
