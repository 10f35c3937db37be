import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from bottleup_node import config as node_config
from bottleup_node.bottleup_executor import BottleUpExecutor
from bottleup_node.bottleup_runtime import AtomicLedgerStore, DENOMINATION, InvalidQuantity, SubmissionStatus


@pytest.fixture
def cfg(tmp_path, monkeypatch):
    monkeypatch.setenv("BOTTLEUP_OWNER", "0xowner")
    monkeypatch.setenv("BOTTLEUP_INITIAL_TREASURY", str(100 * DENOMINATION))
    return node_config.load_config(str(tmp_path))


def test_store_save_and_load(tmp_path):
    store = AtomicLedgerStore(tmp_path)
    assert store.load() is None

    store.save({"a": 1})
    store.save({"a": 2})

    assert store.load() == {"a": 2}
    assert json.loads(store._backup_path(1).read_text()) == {"a": 1}
    assert not store.journal_path.exists()


def test_store_falls_back_to_backup(tmp_path):
    store = AtomicLedgerStore(tmp_path)
    store.save({"a": 1})
    store.save({"a": 2})
    store.path.write_text("{not json")

    assert store.load() == {"a": 1}


def test_executor_state_survives_restart(tmp_path, cfg):
    store = AtomicLedgerStore(tmp_path / "data")
    ex = BottleUpExecutor(cfg, store=store)
    ex.register("0xalice", "alice")
    ex.submit("0xalice", 12)
    ex.verify("0xowner", "0xalice", 0)
    ex.redeem("0xalice")
    ex.add_admin("0xowner", "0xadmin")

    again = BottleUpExecutor(cfg, store=AtomicLedgerStore(tmp_path / "data"))

    p = again.profile("0xalice")
    assert (p.total_submitted, p.total_verified, p.total_redeemed, p.credit_balance) == (12, 12, 10, 1)
    assert again.submissions("0xalice")[0].status == SubmissionStatus.REDEEMED
    assert again.gate.admins() == ["0xadmin"]
    assert again.credit.balance_of("0xalice") == DENOMINATION
    assert again.credit.balance_of(again.credit.treasury) == 99 * DENOMINATION


def test_failed_operation_does_not_persist(tmp_path, cfg):
    store = AtomicLedgerStore(tmp_path / "data")
    ex = BottleUpExecutor(cfg, store=store)
    ex.register("0xalice", "alice")
    before = store.load()

    with pytest.raises(InvalidQuantity):
        ex.submit("0xalice", 0)

    assert store.load() == before


def test_corrupt_snapshot_is_rejected(tmp_path, cfg):
    store = AtomicLedgerStore(tmp_path / "data")
    ex = BottleUpExecutor(cfg, store=store)
    ex.register("0xalice", "alice")
    ex.submit("0xalice", 5)

    state = store.load()
    state["ledger"]["accounts"][0]["profile"]["total_verified"] = 50
    store.save(state)

    with pytest.raises(ValueError):
        BottleUpExecutor(cfg, store=AtomicLedgerStore(tmp_path / "data"))


class _FullDiskStore(AtomicLedgerStore):
    def __init__(self, data_dir):
        super().__init__(data_dir)
        self.full = False

    def save(self, state):
        if self.full:
            raise OSError("disk full")
        super().save(state)


def test_save_failure_keeps_applied_redeem(tmp_path, cfg):
    store = _FullDiskStore(tmp_path / "data")
    ex = BottleUpExecutor(cfg, store=store)
    ex.register("0xalice", "alice")
    ex.submit("0xalice", 10)
    ex.verify("0xowner", "0xalice", 0)

    store.full = True
    receipt = ex.redeem("0xalice")

    assert receipt.units == 1
    assert ex.degraded
    p = ex.profile("0xalice")
    assert (p.total_redeemed, p.credit_balance) == (10, 1)
    assert ex.credit.balance_of("0xalice") == DENOMINATION

    store.full = False
    ex.submit("0xalice", 1)
    assert not ex.degraded
    assert store.load()["ledger"]["accounts"][0]["profile"]["credit_balance"] == 1


def test_snapshots_pair_ledger_with_credit(tmp_path, cfg):
    store = AtomicLedgerStore(tmp_path / "data")
    ex = BottleUpExecutor(cfg, store=store)
    users = [f"0xu{i}" for i in range(4)]
    for u in users:
        ex.register(u, u)
        for _ in range(3):
            ex.verify("0xowner", u, ex.submit(u, 10))

    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(lambda u: [ex.redeem(u) for _ in range(3)], users))

    state = store.load()
    for item in state["ledger"]["accounts"]:
        prof = item["profile"]
        assert state["credit"]["accounts"][prof["identity"]] == prof["credit_balance"] * DENOMINATION
