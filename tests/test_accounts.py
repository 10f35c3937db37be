import pytest

from bottleup_node.bottleup_runtime import AlreadyRegistered, InvalidTarget, NotRegistered


def test_register_creates_zeroed_profile(ledger):
    p = ledger.register("0xalice", "alice")
    assert p.identity == "0xalice"
    assert p.display_name == "alice"
    assert (p.total_submitted, p.total_verified, p.total_redeemed, p.credit_balance) == (0, 0, 0, 0)
    assert ledger.is_registered("0xalice")
    assert not ledger.is_registered("0xbob")


def test_register_twice_fails_without_side_effects(ledger, alice):
    ledger.submit(alice, 5)
    with pytest.raises(AlreadyRegistered):
        ledger.register(alice, "someone else")

    p = ledger.profile(alice)
    assert p.display_name == "alice"
    assert p.total_submitted == 5
    assert ledger.registry.identities() == [alice]


def test_register_empty_identity_rejected(ledger):
    with pytest.raises(InvalidTarget):
        ledger.register("", "nobody")
    assert len(ledger.registry) == 0


def test_registration_order_preserved(ledger):
    for name in ("c", "a", "b"):
        ledger.register(f"0x{name}", name)
    assert ledger.registry.identities() == ["0xc", "0xa", "0xb"]


def test_profile_of_unknown_identity(ledger):
    with pytest.raises(NotRegistered):
        ledger.profile("0xghost")


def test_profile_is_a_snapshot(ledger, alice):
    p = ledger.profile(alice)
    p.total_verified = 999
    assert ledger.profile(alice).total_verified == 0


def test_identity_is_kept_verbatim(ledger):
    ledger.register(" 0xalice", "padded")
    assert ledger.is_registered(" 0xalice")
    assert not ledger.is_registered("0xalice")

    ledger.register("0xalice", "plain")
    ledger.submit(" 0xalice", 4)
    assert ledger.profile(" 0xalice").total_submitted == 4
    assert ledger.profile("0xalice").total_submitted == 0
    assert ledger.registry.identities() == [" 0xalice", "0xalice"]
