#!/usr/bin/env python3
"""
BottleUp CLI: operator console for the recycling ledger
"""
from __future__ import annotations

from .bottleup_executor import executor
from .bottleup_runtime.errors import LedgerError

COMMANDS = (
    "register/submit/verify/redeem/profile/submissions/top/"
    "add_admin/remove_admin/admins/fund/balance/audit/exit"
)


def safe_int(prompt):
    try:
        return int(input(prompt))
    except ValueError:
        print("Invalid number")
        return None


def _run(fn, *args):
    try:
        return fn(*args)
    except LedgerError as e:
        return {"ok": False, "error": e.code, "message": str(e)}


def run_cli(ex=None):
    ex = ex or executor
    print("BottleUp CLI started. Type 'exit' to quit.")

    while True:
        cmd = input(f"\nCommand ({COMMANDS}): ").strip().lower()

        if cmd == "exit":
            break

        elif cmd == "register":
            u = input("User ID: ").strip()
            name = input("Display name: ").strip()
            out = _run(ex.register, u, name)
            print(out.to_dict() if hasattr(out, "to_dict") else out)

        elif cmd == "submit":
            u = input("User ID: ").strip()
            qty = safe_int("Bottles: ")
            if qty is None:
                continue
            out = _run(ex.submit, u, qty)
            print({"ok": True, "index": out} if isinstance(out, int) else out)

        elif cmd == "verify":
            caller = input("Admin ID: ").strip()
            u = input("User ID: ").strip()
            idx = safe_int("Submission index: ")
            if idx is None:
                continue
            out = _run(ex.verify, caller, u, idx)
            print(out.to_dict() if hasattr(out, "to_dict") else out)

        elif cmd == "redeem":
            u = input("User ID: ").strip()
            out = _run(ex.redeem, u)
            print(out.to_dict() if hasattr(out, "to_dict") else out)

        elif cmd == "profile":
            u = input("User ID: ").strip()
            out = _run(ex.profile, u)
            print(out.to_dict() if hasattr(out, "to_dict") else out)

        elif cmd == "submissions":
            u = input("User ID: ").strip()
            out = _run(ex.submissions, u)
            if isinstance(out, dict):
                print(out)
                continue
            for i, s in enumerate(out):
                print(f"[{i}] {s.quantity} bottles, {s.status.value}")
            if not out:
                print("No submissions.")

        elif cmd == "top":
            n = safe_int("How many: ")
            if n is None:
                continue
            out = _run(ex.top_n, n)
            if isinstance(out, dict):
                print(out)
                continue
            for rank, p in enumerate(out, start=1):
                print(f"{rank}. {p.display_name} ({p.identity}) verified={p.total_verified}")

        elif cmd == "add_admin":
            caller = input("Owner ID: ").strip()
            t = input("New admin ID: ").strip()
            out = _run(ex.add_admin, caller, t)
            print(out or {"ok": True, "admins": ex.gate.admins()})

        elif cmd == "remove_admin":
            caller = input("Owner ID: ").strip()
            t = input("Admin ID to remove: ").strip()
            out = _run(ex.remove_admin, caller, t)
            print(out or {"ok": True, "admins": ex.gate.admins()})

        elif cmd == "admins":
            print({"owner": ex.gate.owner, "admins": ex.gate.admins()})

        elif cmd == "fund":
            caller = input("Owner/Admin ID: ").strip()
            amt = safe_int("Amount (base units): ")
            if amt is None:
                continue
            out = _run(ex.fund_treasury, caller, amt)
            print({"ok": True, "treasury_balance": out} if isinstance(out, int) else out)

        elif cmd == "balance":
            u = input("Account ID: ").strip()
            print({"balance": ex.credit.balance_of(u)})

        elif cmd == "audit":
            print({"ok": ex.ledger.audit()})

        else:
            print("Unknown command.")


if __name__ == "__main__":
    run_cli()
