# carefund/routers/donators.py
from fastapi import APIRouter, Depends

from carefund.deps import get_donator_service
from carefund.schemas import RegisterIn, RegisterOut
from carefund.services.donators import DonatorService

router = APIRouter(prefix="/api", tags=["donators"])

USER_DASHBOARD = "/user-dashboard.html"


@router.post("/donator/register", response_model=RegisterOut)
async def register(body: RegisterIn, svc: DonatorService = Depends(get_donator_service)):
    donator, created = await svc.register_or_fetch(body.token)
    return {
        "message": "Registration successful" if created else "Already registered",
        "donator": donator,
        "redirect": USER_DASHBOARD,
    }


# ---------- Old path used by the Google sign-in button ----------
@router.post("/donater/google-register", response_model=RegisterOut, include_in_schema=False)
async def register_legacy(body: RegisterIn, svc: DonatorService = Depends(get_donator_service)):
    return await register(body, svc)
