from fastapi import Depends

from carefund.core.config import settings
from carefund.services.blob import BlobStore
from carefund.services.cases import CaseService
from carefund.services.chat import GeminiChat
from carefund.services.donations import DonationService
from carefund.services.donators import DonatorService
from carefund.services.identity import GoogleIdentityVerifier
from carefund.services.qr import QRRenderer

if settings.use_mongo:
    from carefund.core.db import get_db
    from carefund.repos.mongo import MongoStore
    _store_singleton = MongoStore(get_db())
else:
    from carefund.repos.inmemory import InMemoryStore
    _store_singleton = InMemoryStore()

_qr = QRRenderer(timeout=settings.external_timeout_seconds)
_blobs = BlobStore(
    settings.blob_read_write_token,
    api_url=settings.blob_api_url,
    timeout=settings.external_timeout_seconds,
)
_identity = GoogleIdentityVerifier(settings.google_client_id, timeout=settings.external_timeout_seconds)
_chat = GeminiChat(
    settings.gemini_api_key,
    settings.gemini_model,
    max_output_tokens=settings.chat_max_output_tokens,
    timeout=settings.external_timeout_seconds,
)


# collaborators are separate dependencies so tests can override each one
def get_store():
    return _store_singleton

def get_qr():
    return _qr

def get_blobs():
    return _blobs

def get_identity():
    return _identity

def get_chat():
    return _chat


def get_donation_service(store=Depends(get_store), qr=Depends(get_qr)) -> DonationService:
    return DonationService(store, qr, upi_id=settings.upi_id, payee_name=settings.payee_name)

def get_case_service(store=Depends(get_store), blobs=Depends(get_blobs)) -> CaseService:
    return CaseService(store, blobs)

def get_donator_service(store=Depends(get_store), identity=Depends(get_identity)) -> DonatorService:
    return DonatorService(store, identity)
