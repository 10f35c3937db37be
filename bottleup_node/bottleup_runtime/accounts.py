from __future__ import annotations

"""
Account registry: identity -> profile, one-time registration.

Each registered identity owns an AccountRecord bundling its profile, its
submission sequence and the lock that serializes every operation on that
identity. The registry lock only guards membership and the registration
order, so work on different identities never contends on it for long.
"""

import logging
import threading
from dataclasses import asdict, dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, List

from .errors import AlreadyRegistered, InvalidTarget, NotRegistered

if TYPE_CHECKING:
    from .submissions import Submission

log = logging.getLogger(__name__)


@dataclass
class Profile:
    identity: str
    display_name: str
    total_submitted: int = 0
    total_verified: int = 0
    total_redeemed: int = 0
    credit_balance: int = 0

    @property
    def redeemable(self) -> int:
        """Verified quantity not yet converted to credit."""
        return self.total_verified - self.total_redeemed

    def snapshot(self) -> "Profile":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AccountRecord:
    profile: Profile
    submissions: List["Submission"] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)


class AccountRegistry:
    def __init__(self) -> None:
        self._records: Dict[str, AccountRecord] = {}
        self._order: List[str] = []
        self._lock = threading.Lock()

    def register(self, identity: str, display_name: str) -> Profile:
        if not identity:
            raise InvalidTarget("identity must not be empty")

        with self._lock:
            if identity in self._records:
                raise AlreadyRegistered(
                    f"{identity!r} is already registered", {"identity": identity}
                )
            rec = AccountRecord(profile=Profile(identity=identity, display_name=str(display_name or "")))
            self._records[identity] = rec
            self._order.append(identity)

        log.info("registered %s (%s)", identity, rec.profile.display_name)
        return rec.profile.snapshot()

    def is_registered(self, identity: str) -> bool:
        with self._lock:
            return identity in self._records

    def record(self, identity: str) -> AccountRecord:
        with self._lock:
            rec = self._records.get(identity)
        if rec is None:
            raise NotRegistered(f"{identity!r} is not registered", {"identity": identity})
        return rec

    def get_profile(self, identity: str) -> Profile:
        rec = self.record(identity)
        with rec.lock:
            return rec.profile.snapshot()

    def identities(self) -> List[str]:
        """Registered identities in registration order (a copy)."""
        with self._lock:
            return list(self._order)

    def records(self) -> List[AccountRecord]:
        with self._lock:
            return [self._records[i] for i in self._order]

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def _restore(self, rec: AccountRecord) -> None:
        """Insert a fully built record (used when loading a snapshot)."""
        identity = rec.profile.identity
        with self._lock:
            if identity in self._records:
                raise AlreadyRegistered(f"{identity!r} is already registered", {"identity": identity})
            self._records[identity] = rec
            self._order.append(identity)


__all__ = ["AccountRecord", "AccountRegistry", "Profile"]
