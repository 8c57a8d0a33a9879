import asyncio

from carefund.core.db import ensure_indexes, get_client, get_db
from carefund.repos.kinds import CASES, DONATIONS
from carefund.repos.mongo import MongoStore


async def main():
    db = get_db()
    await ensure_indexes(db)
    store = MongoStore(db)

    # wipe demo rows if they exist
    await db[CASES].delete_many({"patient_id": "DEMO-1"})
    await db[DONATIONS].delete_many({"email": "demo@carefund.org"})

    case = await store.create(CASES, {
        "patient_id": "DEMO-1",
        "patient_name": "Demo Patient",
        "medical_condition": "Fracture",
        "description": "Surgery and rehab costs",
        "requested_amount": 50000,
        "images": [],
        "status": "Pending",
    })
    donation = await store.create(DONATIONS, {
        "name": "Demo Donor",
        "email": "demo@carefund.org",
        "amount": 500,
        "status": "Pending",
        "rejection_reason": None,
        "transaction_id": None,
    })
    print(f"Seeded case {case['id']} and donation {donation['id']}")
    get_client().close()

if __name__ == "__main__":
    asyncio.run(main())
