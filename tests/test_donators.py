import pytest

from carefund.core.errors import Unauthenticated
from carefund.repos.kinds import DONATORS
from carefund.services.donators import DonatorService
from carefund.services.stats import compute_public_stats

pytestmark = pytest.mark.anyio


async def test_register_creates_donator_from_claims(store, identity):
    svc = DonatorService(store, identity)
    donator, created = await svc.register_or_fetch("tok-alice")

    assert created
    assert donator["email"] == "alice@x.com"
    assert donator["subject_id"] == "g-1"
    assert donator["name"] == "Alice"
    assert donator["profile_pic"] == "https://pics.test/a.png"
    assert donator["registration_date"] is not None


async def test_register_is_idempotent_per_email(store, identity):
    svc = DonatorService(store, identity)
    first, _ = await svc.register_or_fetch("tok-alice")
    again, created = await svc.register_or_fetch("tok-alice-2")

    assert not created
    assert again["id"] == first["id"]
    # provider-side name change is not copied over
    assert again["name"] == "Alice"
    assert await store.count(DONATORS) == 1
    assert (await compute_public_stats(store))["totalDonators"] == 1


async def test_bad_token_is_unauthenticated(store, identity):
    svc = DonatorService(store, identity)
    with pytest.raises(Unauthenticated):
        await svc.register_or_fetch("forged")
    assert await store.count(DONATORS) == 0
