# carefund/routers/donations.py
from html import escape
from typing import List, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse

from carefund.deps import get_donation_service
from carefund.schemas import DonationOut, MyDonationsIn
from carefund.services.donations import DonationService

router = APIRouter(tags=["donations"])

PAY_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Complete Your Donation</title>
</head>
<body>
    <div style="text-align:center;margin-top:50px">
        <h1>Scan &amp; Pay</h1>
        <p>Amount: &#8377;{amount}</p>
        <img src="{qr}" width="200" alt="UPI QR code" />
        <br><br>
        <a href="{link}">Pay Now</a>
    </div>
</body>
</html>
"""


@router.post("/donate", response_class=HTMLResponse)
async def donate(
    amount: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    svc: DonationService = Depends(get_donation_service),
):
    donation, link, qr_image = await svc.submit(name, email, amount)
    return PAY_PAGE.format(
        amount=escape(str(donation["amount"])),
        qr=escape(qr_image, quote=True),
        link=escape(link, quote=True),
    )


@router.post("/api/my-donations", response_model=List[DonationOut])
async def my_donations(body: MyDonationsIn, svc: DonationService = Depends(get_donation_service)):
    return await svc.list_by_email(body.email)
