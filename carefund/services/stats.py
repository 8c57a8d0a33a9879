# carefund/services/stats.py
from carefund.repos.kinds import CASES, DONATIONS, DONATORS
from carefund.services.donations import APPROVED


async def compute_public_stats(store):
    """
    Returns a dict that matches the PublicStats schema.
    Always read fresh from the store; nothing is cached.
    """
    approved = await store.find(DONATIONS, {"status": APPROVED}, sort_newest=False)
    return {
        "totalDonations": sum(d.get("amount") or 0 for d in approved),
        "totalDonators": await store.count(DONATORS),
        "patientsHelped": await store.count(CASES),
    }
