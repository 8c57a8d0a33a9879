from typing import Optional, List, Literal, Union
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# --------------------------
# Donators
# --------------------------
class DonatorOut(CamelModel):
    id: str
    subject_id: Optional[str] = None
    name: Optional[str] = None
    email: str
    profile_pic: Optional[str] = None
    registration_date: datetime

class RegisterIn(BaseModel):
    # older clients post the Google credential as "id_token"
    token: str = Field(..., validation_alias=AliasChoices("token", "id_token"))

class RegisterOut(BaseModel):
    message: str
    donator: DonatorOut
    redirect: str

# --------------------------
# Donations
# --------------------------
DonationStatus = Literal["Pending", "Approved", "Rejected"]

class DonationOut(CamelModel):
    id: str
    name: Optional[str] = None
    email: str
    amount: Union[int, float]
    status: DonationStatus
    rejection_reason: Optional[str] = None
    transaction_id: Optional[str] = None
    date: datetime

class ApproveIn(CamelModel):
    id: str
    transaction_id: Optional[str] = None

class RejectIn(BaseModel):
    id: str
    reason: Optional[str] = None

class DecisionOut(BaseModel):
    message: str
    donation: DonationOut

class MyDonationsIn(BaseModel):
    email: str

# --------------------------
# Cases
# --------------------------
class CaseOut(CamelModel):
    id: str
    patient_id: Optional[str] = None
    patient_name: Optional[str] = None
    medical_condition: Optional[str] = None
    description: Optional[str] = None
    requested_amount: Union[int, float]
    images: List[str] = []
    status: str
    date_added: datetime

class CaseCreatedOut(BaseModel):
    message: str
    case: CaseOut

# --------------------------
# Admin
# --------------------------
class LoginIn(BaseModel):
    username: str
    password: str

class LoginOut(BaseModel):
    ok: bool = True
    message: str
    redirect: str

# --------------------------
# Stats
# --------------------------
class PublicStats(BaseModel):
    totalDonations: Union[int, float]
    totalDonators: int
    patientsHelped: int

# --------------------------
# Chat
# --------------------------
class ChatTurn(BaseModel):
    role: str
    parts: Union[List[str], str]

class ChatIn(BaseModel):
    history: List[ChatTurn]

class ChatOut(BaseModel):
    response: str
