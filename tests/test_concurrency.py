import threading
from concurrent.futures import ThreadPoolExecutor

from bottleup_node.bottleup_runtime import InsufficientQuantity

ADMIN = "0xadmin"


def test_concurrent_submits_for_two_identities(ledger, alice, bob):
    def work(who):
        for _ in range(50):
            ledger.submit(who, 2)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(work, [alice, bob] * 4))

    for who in (alice, bob):
        p = ledger.profile(who)
        assert p.total_submitted == 400
        assert len(ledger.submissions(who)) == 200
    assert ledger.audit()


def test_concurrent_indices_are_unique(ledger, alice):
    with ThreadPoolExecutor(max_workers=8) as pool:
        indices = list(pool.map(lambda _: ledger.submit(alice, 1), range(100)))
    assert sorted(indices) == list(range(100))


def test_submit_verify_redeem_race_keeps_invariants(ledger, credit, alice):
    stop = threading.Event()
    units = []
    broken = []

    def producer():
        for _ in range(60):
            idx = ledger.submit(alice, 3)
            ledger.verify(ADMIN, alice, idx)
        stop.set()

    def redeemer():
        while not stop.is_set():
            try:
                units.append(ledger.redeem(alice).units)
            except InsufficientQuantity:
                pass
            p = ledger.profile(alice)
            if not p.total_redeemed <= p.total_verified <= p.total_submitted:
                broken.append(p)

    threads = [threading.Thread(target=producer)] + [threading.Thread(target=redeemer) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert broken == []
    p = ledger.profile(alice)
    assert p.total_verified == 180
    assert p.credit_balance == sum(units)
    assert p.total_redeemed == sum(units) * ledger.exchange_rate
    assert credit.balance_of(alice) == sum(units) * ledger.denomination
    assert ledger.audit()


def test_leaderboard_reads_during_mutation(ledger, alice, bob):
    def writer(who):
        for _ in range(40):
            idx = ledger.submit(who, 1)
            ledger.verify(ADMIN, who, idx)

    def reader():
        for _ in range(40):
            top = ledger.top_n(2)
            assert top[0].total_verified >= top[1].total_verified
            for p in top:
                assert p.total_redeemed <= p.total_verified <= p.total_submitted

    with ThreadPoolExecutor(max_workers=4) as pool:
        futures = [pool.submit(writer, alice), pool.submit(writer, bob), pool.submit(reader), pool.submit(reader)]
        for f in futures:
            f.result()

    assert [p.total_verified for p in ledger.top_n(2)] == [40, 40]
