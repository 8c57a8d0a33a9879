# carefund/routers/admin.py
import hmac
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from carefund.core.config import settings
from carefund.core.errors import Unauthenticated
from carefund.deps import get_case_service, get_donation_service, get_donator_service
from carefund.schemas import (
    ApproveIn, CaseCreatedOut, CaseOut, DecisionOut, DonationOut,
    DonatorOut, LoginIn, LoginOut, RejectIn,
)
from carefund.services.cases import CaseInput, CaseService, ImageFile
from carefund.services.donations import DonationService
from carefund.services.donators import DonatorService

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)

ADMIN_DASHBOARD = "/admin-dashboard.html"


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode(), b.encode())

# ---------- Login (static credential pair) ----------
@router.post("/login", response_model=LoginOut)
async def login(body: LoginIn):
    user_ok = _same(body.username, settings.admin_username)
    pass_ok = _same(body.password, settings.admin_password)
    if not (user_ok and pass_ok):
        logger.warning("Rejected admin login attempt")
        raise Unauthenticated("Invalid credentials")
    return {"ok": True, "message": "Login successful", "redirect": ADMIN_DASHBOARD}

# ---------- Cases ----------
@router.get("/cases", response_model=List[CaseOut])
async def list_cases(svc: CaseService = Depends(get_case_service)):
    return await svc.list_all()

@router.post("/cases", response_model=CaseCreatedOut, status_code=status.HTTP_201_CREATED)
async def add_case(
    patient_id: Optional[str] = Form(None, alias="patientId"),
    patient_name: Optional[str] = Form(None, alias="patientName"),
    medical_condition: Optional[str] = Form(None, alias="medicalCondition"),
    description: Optional[str] = Form(None),
    requested_amount: Optional[str] = Form(None, alias="requestedAmount"),
    images: Optional[List[UploadFile]] = File(None),
    svc: CaseService = Depends(get_case_service),
):
    files = [
        ImageFile(filename=f.filename or "image", data=await f.read(), content_type=f.content_type)
        for f in (images or [])
    ]
    case = await svc.publish(
        CaseInput(
            patient_id=patient_id,
            patient_name=patient_name,
            medical_condition=medical_condition,
            description=description,
            requested_amount=requested_amount,
        ),
        files,
    )
    return {"message": "Case added successfully", "case": case}

# ---------- Donations ----------
@router.get("/donations", response_model=List[DonationOut])
async def list_donations(svc: DonationService = Depends(get_donation_service)):
    return await svc.list_all()

@router.post("/approve-donation", response_model=DecisionOut)
async def approve_donation(body: ApproveIn, svc: DonationService = Depends(get_donation_service)):
    donation = await svc.approve(body.id, body.transaction_id)
    return {"message": "Donation approved successfully", "donation": donation}

@router.post("/reject-donation", response_model=DecisionOut)
async def reject_donation(body: RejectIn, svc: DonationService = Depends(get_donation_service)):
    donation = await svc.reject(body.id, body.reason)
    return {"message": "Donation rejected successfully", "donation": donation}

# ---------- Donators ----------
@router.get("/donators", response_model=List[DonatorOut])
async def list_donators(svc: DonatorService = Depends(get_donator_service)):
    return await svc.list_all()
