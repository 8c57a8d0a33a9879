# carefund/services/cases.py
import asyncio
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from carefund.core.errors import CareFundError, Internal, InvalidArgument
from carefund.repos.kinds import CASES

logger = logging.getLogger(__name__)

CASE_PENDING = "Pending"
MIN_IMAGES = 1
MAX_IMAGES = 5


@dataclass
class ImageFile:
    filename: str
    data: bytes
    content_type: Optional[str] = None


@dataclass
class CaseInput:
    patient_name: Optional[str]
    medical_condition: Optional[str]
    description: Optional[str]
    requested_amount: object
    patient_id: Optional[str] = None


def _requested_amount(value) -> float | int:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument("Invalid requested amount")
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        raise InvalidArgument("Invalid requested amount")
    return int(amount) if amount.is_integer() else amount


class CaseService:
    def __init__(self, store, blobs):
        self.store = store
        self.blobs = blobs

    async def _upload_all(self, images: List[ImageFile]) -> List[str]:
        # gather() returns results in argument order, not completion order
        try:
            return await asyncio.gather(*(
                self.blobs.put(img.filename, img.data, img.content_type) for img in images
            ))
        except CareFundError:
            raise
        except Exception as e:
            logger.error(f"Image upload failed: {e}")
            raise Internal("Error uploading case images") from e

    async def publish(self, case_input: CaseInput, images: List[ImageFile]) -> dict:
        """
        Upload the case images, then persist the case.

        All-or-nothing: if any upload fails nothing is written. Uploads that
        already finished are left in blob storage.
        """
        if not images or len(images) < MIN_IMAGES:
            raise InvalidArgument("No images uploaded")
        if len(images) > MAX_IMAGES:
            raise InvalidArgument(f"At most {MAX_IMAGES} images are allowed")
        amount = _requested_amount(case_input.requested_amount)

        urls = await self._upload_all(images)

        case = await self.store.create(CASES, {
            "patient_id": (case_input.patient_id or "").strip() or None,
            "patient_name": case_input.patient_name,
            "medical_condition": case_input.medical_condition,
            "description": case_input.description,
            "requested_amount": amount,
            "images": list(urls),
            "status": CASE_PENDING,
        })
        logger.info(f"Case {case['id']} published with {len(urls)} image(s)")
        return case

    async def list_all(self) -> List[dict]:
        return await self.store.find(CASES)

    async def list_public(self) -> List[dict]:
        return await self.list_all()
