import pytest

from bottleup_node.bottleup_runtime import AccessGate, InMemoryCreditLedger, RecyclingLedger
from bottleup_node.bottleup_runtime.redemption import DENOMINATION

OWNER = "0xowner"
ADMIN = "0xadmin"


@pytest.fixture
def gate():
    return AccessGate(owner=OWNER, admins=[ADMIN])


@pytest.fixture
def credit():
    """Treasury funded like the reward pool in a fresh deployment."""
    return InMemoryCreditLedger(initial_treasury=10_000 * DENOMINATION)


@pytest.fixture
def ledger(gate, credit):
    return RecyclingLedger(gate, credit)


@pytest.fixture
def alice(ledger):
    ledger.register("0xalice", "alice")
    return "0xalice"


@pytest.fixture
def bob(ledger):
    ledger.register("0xbob", "bob")
    return "0xbob"
