# carefund/routers/public.py
from typing import List

from fastapi import APIRouter, Depends

from carefund.deps import get_case_service, get_store
from carefund.schemas import CaseOut, PublicStats
from carefund.services.cases import CaseService
from carefund.services.stats import compute_public_stats

router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/cases", response_model=List[CaseOut])
async def public_cases(svc: CaseService = Depends(get_case_service)):
    return await svc.list_public()


@router.get("/stats", response_model=PublicStats)
async def public_stats(store=Depends(get_store)):
    return await compute_public_stats(store)
