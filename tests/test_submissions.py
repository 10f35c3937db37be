import pytest

from bottleup_node.bottleup_runtime import (
    AlreadyVerified,
    InvalidIndex,
    InvalidQuantity,
    NotRegistered,
    SubmissionStatus,
    Unauthorized,
)

OWNER = "0xowner"
ADMIN = "0xadmin"


def test_submit_appends_pending_and_counts(ledger, alice):
    assert ledger.submit(alice, 5) == 0
    assert ledger.submit(alice, 7) == 1

    subs = ledger.submissions(alice)
    assert [s.quantity for s in subs] == [5, 7]
    assert all(s.status is SubmissionStatus.PENDING for s in subs)
    assert ledger.profile(alice).total_submitted == 12


@pytest.mark.parametrize("qty", [0, -3, True, 2.5, "4"])
def test_submit_invalid_quantity_creates_nothing(ledger, alice, qty):
    with pytest.raises(InvalidQuantity):
        ledger.submit(alice, qty)
    assert ledger.submissions(alice) == []
    assert ledger.profile(alice).total_submitted == 0


def test_submit_requires_registration(ledger):
    with pytest.raises(NotRegistered):
        ledger.submit("0xghost", 3)


@pytest.mark.parametrize("caller", [OWNER, ADMIN])
def test_verify_by_owner_or_admin(ledger, alice, caller):
    ledger.submit(alice, 10)
    sub = ledger.verify(caller, alice, 0)
    assert sub.status is SubmissionStatus.VERIFIED
    assert ledger.profile(alice).total_verified == 10


def test_verify_by_regular_caller_is_unauthorized(ledger, alice, bob):
    ledger.submit(alice, 10)
    with pytest.raises(Unauthorized):
        ledger.verify(bob, alice, 0)
    with pytest.raises(Unauthorized):
        ledger.verify(alice, alice, 0)
    assert ledger.profile(alice).total_verified == 0
    assert ledger.submissions(alice)[0].status is SubmissionStatus.PENDING


def test_unauthorized_checked_before_registration(ledger):
    with pytest.raises(Unauthorized):
        ledger.verify("0xnobody", "0xghost", 0)


def test_verify_unknown_identity(ledger):
    with pytest.raises(NotRegistered):
        ledger.verify(ADMIN, "0xghost", 0)


@pytest.mark.parametrize("index", [1, 5, -1])
def test_verify_out_of_range(ledger, alice, index):
    ledger.submit(alice, 10)
    with pytest.raises(InvalidIndex):
        ledger.verify(ADMIN, alice, index)


def test_verify_twice_counts_once(ledger, alice):
    ledger.submit(alice, 10)
    ledger.verify(ADMIN, alice, 0)
    with pytest.raises(AlreadyVerified):
        ledger.verify(OWNER, alice, 0)
    assert ledger.profile(alice).total_verified == 10


def test_verify_redeemed_submission_is_already_verified(ledger, alice):
    ledger.submit(alice, 10)
    ledger.verify(ADMIN, alice, 0)
    ledger.redeem(alice)
    with pytest.raises(AlreadyVerified):
        ledger.verify(ADMIN, alice, 0)


def test_verify_targets_only_given_index(ledger, alice):
    ledger.submit(alice, 3)
    ledger.submit(alice, 4)
    ledger.verify(ADMIN, alice, 1)
    statuses = [s.status for s in ledger.submissions(alice)]
    assert statuses == [SubmissionStatus.PENDING, SubmissionStatus.VERIFIED]
    assert ledger.profile(alice).total_verified == 4


def test_submissions_listing_is_a_copy(ledger, alice):
    ledger.submit(alice, 3)
    subs = ledger.submissions(alice)
    subs[0].status = SubmissionStatus.REDEEMED
    subs.append(subs[0])
    assert len(ledger.submissions(alice)) == 1
    assert ledger.submissions(alice)[0].status is SubmissionStatus.PENDING
