"""
bottleup_node/bottleup_runtime/access.py
----------------------------------------

Owner / admin capability gate.

Policy:
- exactly one owner, fixed at construction
- a mutable set of admins, managed only by the owner
- the owner is always privileged independent of the admin set, so
  remove_admin() can never strip owner privilege
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from .errors import InvalidTarget, NotAnAdmin, Unauthorized

log = logging.getLogger(__name__)


def _norm(identity: Optional[str]) -> str:
    # identities are opaque keys, compared exactly as given
    return "" if identity is None else str(identity)


class AccessGate:
    def __init__(self, owner: str, admins: Optional[Iterable[str]] = None) -> None:
        owner = _norm(owner)
        if not owner:
            raise InvalidTarget("owner identity must not be empty")
        self._owner = owner
        self._admins = {a for a in (_norm(x) for x in (admins or [])) if a}
        self._lock = threading.Lock()

    @property
    def owner(self) -> str:
        return self._owner

    # ---------- Checks ----------
    def is_owner(self, caller: Optional[str]) -> bool:
        return bool(caller) and _norm(caller) == self._owner

    def is_admin(self, caller: Optional[str]) -> bool:
        with self._lock:
            return _norm(caller) in self._admins

    def is_privileged(self, caller: Optional[str]) -> bool:
        """Owner OR admin. Used by verification and admin-only actions."""
        return self.is_owner(caller) or self.is_admin(caller)

    def require_privileged(self, caller: Optional[str], *, action: str) -> None:
        if not self.is_privileged(caller):
            log.warning("unauthorized %s attempt by %r", action, caller)
            raise Unauthorized(
                f"'{action}' requires owner or admin",
                {"action": action, "caller": _norm(caller)},
            )

    def _require_owner(self, caller: Optional[str], *, action: str) -> None:
        if not self.is_owner(caller):
            log.warning("unauthorized %s attempt by %r", action, caller)
            raise Unauthorized(
                f"'{action}' requires owner",
                {"action": action, "caller": _norm(caller)},
            )

    # ---------- Admin management ----------
    def add_admin(self, caller: Optional[str], target: Optional[str]) -> None:
        self._require_owner(caller, action="add_admin")
        t = _norm(target)
        if not t:
            raise InvalidTarget("admin identity must not be empty", {"target": target})
        with self._lock:
            self._admins.add(t)
        log.info("admin added: %s", t)

    def remove_admin(self, caller: Optional[str], target: Optional[str]) -> None:
        self._require_owner(caller, action="remove_admin")
        t = _norm(target)
        with self._lock:
            if t not in self._admins:
                raise NotAnAdmin(f"{t!r} is not an admin", {"target": t})
            self._admins.discard(t)
        log.info("admin removed: %s", t)

    def admins(self) -> List[str]:
        with self._lock:
            return sorted(self._admins)

    # ---------- Persistence ----------
    def to_dict(self) -> Dict[str, Any]:
        return {"owner": self._owner, "admins": self.admins()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessGate":
        return cls(owner=data.get("owner", ""), admins=data.get("admins") or [])


__all__ = ["AccessGate"]
