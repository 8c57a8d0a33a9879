import pytest
from bson import ObjectId

from carefund.core.errors import Internal, InvalidArgument, InvalidState, NotFound
from carefund.repos.kinds import DONATIONS
from carefund.services.donations import DonationService, parse_amount
from carefund.services.stats import compute_public_stats

from conftest import FakeQR

pytestmark = pytest.mark.anyio


@pytest.fixture
def svc(store, qr):
    return DonationService(store, qr, upi_id="care@upi", payee_name="CareFund")


async def test_submit_creates_pending_donation_listed_by_email(svc, qr):
    donation, link, qr_image = await svc.submit("A", "a@x.com", 500)

    assert donation["status"] == "Pending"
    assert donation["amount"] == 500
    assert donation["transaction_id"] is None and donation["rejection_reason"] is None
    assert link == "upi://pay?pa=care@upi&pn=A&am=500&cu=INR"
    assert qr.rendered == [link]
    assert qr_image.startswith("data:image/png;base64,")

    mine = await svc.list_by_email("a@x.com")
    assert [d["id"] for d in mine] == [donation["id"]]


async def test_submit_uses_payee_name_when_donor_is_anonymous(svc):
    _, link, _ = await svc.submit("", "a@x.com", "250.5")
    assert "pn=CareFund" in link and "am=250.5" in link


@pytest.mark.parametrize("amount", [None, "", "abc", "nan", "inf", 0, -5, True])
async def test_submit_rejects_bad_amounts(svc, store, amount):
    with pytest.raises(InvalidArgument):
        await svc.submit("A", "a@x.com", amount)
    assert await store.count(DONATIONS) == 0


async def test_submit_requires_email(svc):
    with pytest.raises(InvalidArgument):
        await svc.submit("A", "  ", 10)


async def test_qr_failure_persists_nothing(store):
    svc = DonationService(store, FakeQR(fail=True), upi_id="care@upi", payee_name="CareFund")
    with pytest.raises(Internal):
        await svc.submit("A", "a@x.com", 500)
    assert await store.count(DONATIONS) == 0


def test_parse_amount_keeps_integers_integral():
    assert parse_amount("500") == 500 and isinstance(parse_amount("500"), int)
    assert parse_amount(12.5) == 12.5


async def test_scenario_submit_approve_stats(svc, store):
    donation, _, _ = await svc.submit("A", "a@x.com", 500)

    approved = await svc.approve(donation["id"], "TXN1")
    assert approved["status"] == "Approved"
    assert approved["transaction_id"] == "TXN1"

    stats = await compute_public_stats(store)
    assert stats["totalDonations"] == 500


async def test_reject_stores_reason(svc):
    donation, _, _ = await svc.submit("B", "b@x.com", 100)
    rejected = await svc.reject(donation["id"], "No payment received")
    assert rejected["status"] == "Rejected"
    assert rejected["rejection_reason"] == "No payment received"
    assert rejected["transaction_id"] is None


async def test_terminal_states_are_final(svc, store):
    a, _, _ = await svc.submit("A", "a@x.com", 10)
    b, _, _ = await svc.submit("B", "b@x.com", 20)
    await svc.approve(a["id"], "TXN1")
    await svc.reject(b["id"], "duplicate")

    with pytest.raises(InvalidState):
        await svc.reject(a["id"], "changed my mind")
    with pytest.raises(InvalidState):
        await svc.approve(a["id"], "TXN2")
    with pytest.raises(InvalidState):
        await svc.approve(b["id"], "TXN3")

    a_now = await store.find_by_id(DONATIONS, a["id"])
    b_now = await store.find_by_id(DONATIONS, b["id"])
    assert (a_now["status"], a_now["transaction_id"]) == ("Approved", "TXN1")
    assert (b_now["status"], b_now["rejection_reason"]) == ("Rejected", "duplicate")


async def test_approve_unknown_id_is_not_found(svc, store):
    with pytest.raises(NotFound):
        await svc.approve(str(ObjectId()), "TXN1")
    assert await store.count(DONATIONS) == 0


async def test_approve_malformed_id_is_invalid_argument(svc):
    with pytest.raises(InvalidArgument):
        await svc.approve("xyz", "TXN1")


async def test_decisions_require_reference(svc):
    donation, _, _ = await svc.submit("A", "a@x.com", 10)
    with pytest.raises(InvalidArgument):
        await svc.approve(donation["id"], "")
    with pytest.raises(InvalidArgument):
        await svc.reject(donation["id"], None)


async def test_total_counts_only_approved(svc, store):
    amounts = [100, 250, 75, 40, 5]
    ids = [(await svc.submit("D", "d@x.com", a))[0]["id"] for a in amounts]
    await svc.approve(ids[0], "T0")
    await svc.reject(ids[1], "bounced")
    await svc.approve(ids[2], "T2")
    await svc.approve(ids[4], "T4")

    stats = await compute_public_stats(store)
    assert stats["totalDonations"] == 100 + 75 + 5


async def test_list_all_includes_every_status(svc):
    a, _, _ = await svc.submit("A", "a@x.com", 10)
    b, _, _ = await svc.submit("B", "b@x.com", 20)
    await svc.reject(a["id"], "nope")
    assert [d["id"] for d in await svc.list_all()] == [b["id"], a["id"]]
