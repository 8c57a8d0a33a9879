# carefund/services/donations.py
import logging
import math
from typing import List, Optional, Tuple

from carefund.core.errors import InvalidArgument, InvalidState, NotFound
from carefund.repos.kinds import DONATIONS
from carefund.services.qr import upi_link

logger = logging.getLogger(__name__)

PENDING = "Pending"
APPROVED = "Approved"
REJECTED = "Rejected"


def parse_amount(value) -> float | int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument("Amount is required")
    if isinstance(value, bool):
        raise InvalidArgument("Invalid amount")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument("Invalid amount")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidArgument("Invalid amount")
    return int(amount) if amount.is_integer() else amount


class DonationService:
    """
    Donation lifecycle: Pending -> Approved | Rejected.

    Both decisions are terminal. A decision on a donation that already left
    Pending raises InvalidState and leaves the stored record untouched.
    """

    def __init__(self, store, qr, upi_id: str, payee_name: str):
        self.store = store
        self.qr = qr
        self.upi_id = upi_id
        self.payee_name = payee_name

    async def submit(self, name: Optional[str], email: Optional[str], amount) -> Tuple[dict, str, str]:
        amount = parse_amount(amount)
        email = (email or "").strip()
        if not email:
            raise InvalidArgument("Email is required")
        name = (name or "").strip()

        # QR first: a render failure must not leave a persisted donation behind
        link = upi_link(self.upi_id, name or self.payee_name, amount)
        qr_image = await self.qr.render(link)

        donation = await self.store.create(DONATIONS, {
            "name": name,
            "email": email,
            "amount": amount,
            "status": PENDING,
            "rejection_reason": None,
            "transaction_id": None,
        })
        logger.info(f"Donation {donation['id']} submitted by {email} for {amount}")
        return donation, link, qr_image

    async def _decide(self, donation_id: str, fields: dict) -> dict:
        updated = await self.store.update(DONATIONS, donation_id, fields, where={"status": PENDING})
        if updated is not None:
            return updated

        current = await self.store.find_by_id(DONATIONS, donation_id)
        if current is None:
            raise NotFound("Donation not found")
        raise InvalidState(f"Donation is already {current['status']}")

    async def approve(self, donation_id: str, transaction_id: Optional[str]) -> dict:
        if not transaction_id:
            raise InvalidArgument("Transaction id is required")
        donation = await self._decide(donation_id, {"status": APPROVED, "transaction_id": transaction_id})
        logger.info(f"Donation {donation_id} approved (txn {transaction_id})")
        return donation

    async def reject(self, donation_id: str, reason: Optional[str]) -> dict:
        if not reason:
            raise InvalidArgument("Rejection reason is required")
        donation = await self._decide(donation_id, {"status": REJECTED, "rejection_reason": reason})
        logger.info(f"Donation {donation_id} rejected: {reason}")
        return donation

    async def list_by_email(self, email: Optional[str]) -> List[dict]:
        email = (email or "").strip()
        if not email:
            raise InvalidArgument("Email is required")
        return await self.store.find(DONATIONS, {"email": email})

    async def list_all(self) -> List[dict]:
        return await self.store.find(DONATIONS)
