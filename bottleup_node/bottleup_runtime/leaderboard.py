from __future__ import annotations

"""
Leaderboard: top-N registered accounts by verified quantity.

Full recomputation per query. Ranking is by total_verified descending;
ties keep registration order (earlier registration ranks higher).
"""

from typing import Any, List, Sequence

from .accounts import AccountRegistry, Profile
from .errors import InvalidCount


def rank_profiles(profiles: Sequence[Profile], n: int) -> List[Profile]:
    """
    Pure ranking over profiles given in registration order.

    sorted() is stable, so equal totals keep their incoming order.
    """
    _check_count(n, len(profiles))
    ranked = sorted(profiles, key=lambda p: -p.total_verified)
    return ranked[:n]


def _check_count(n: Any, registered: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0 or n > registered:
        raise InvalidCount(
            f"count must be between 1 and {registered}",
            {"n": n, "registered": registered},
        )


class LeaderboardQuery:
    def __init__(self, registry: AccountRegistry) -> None:
        self.registry = registry

    def snapshot(self) -> List[Profile]:
        # Each profile is copied under its own lock; a mutation racing the
        # query shows up either fully or not at all for that account.
        out: List[Profile] = []
        for rec in self.registry.records():
            with rec.lock:
                out.append(rec.profile.snapshot())
        return out

    def top_n(self, n: int) -> List[Profile]:
        return rank_profiles(self.snapshot(), n)


__all__ = ["LeaderboardQuery", "rank_profiles"]
