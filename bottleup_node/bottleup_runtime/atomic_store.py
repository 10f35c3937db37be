from __future__ import annotations

"""
Atomic JSON snapshot store for the recycling ledger.

Layout under data_dir:

    bottleup_state.json           current snapshot
    bottleup_state.json.bak1..N   previous snapshots, newest first
    bottleup_state.json.journal   present only while a save is in flight

A save writes the journal marker, shifts the backup chain down by one,
writes the new snapshot through a temp file + os.replace, then clears the
marker. load() walks the chain and returns the first snapshot that parses.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

log = logging.getLogger(__name__)

JsonDict = Dict[str, Any]
PathLike = Union[str, Path]


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Replace `path` with `data` in one step; readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(dir=path.parent, prefix=f".{path.name}.", delete=False) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except OSError:
            tmp_path.unlink()
            raise

    try:
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink()
        raise

    if hasattr(os, "O_DIRECTORY"):
        dir_fd = os.open(path.parent, os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)


def read_json(path: Path) -> Optional[JsonDict]:
    try:
        with path.open("r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError):
        log.warning("unreadable snapshot %s", path, exc_info=True)
        return None
    return obj if isinstance(obj, dict) else None


class AtomicLedgerStore:
    def __init__(self, data_dir: PathLike, filename: str = "bottleup_state.json", keep_backups: int = 2):
        self.data_dir = Path(data_dir)
        self.filename = filename
        self.keep_backups = max(0, int(keep_backups))

    @property
    def path(self) -> Path:
        return self.data_dir / self.filename

    @property
    def journal_path(self) -> Path:
        return self.data_dir / f"{self.filename}.journal"

    def _backup_path(self, i: int) -> Path:
        return self.data_dir / f"{self.filename}.bak{i}"

    def _chain(self) -> List[Path]:
        """Primary snapshot followed by its backups, newest first."""
        return [self.path] + [self._backup_path(i) for i in range(1, self.keep_backups + 1)]

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[JsonDict]:
        if self.journal_path.exists():
            log.warning("journal marker present at %s; last save may be incomplete", self.journal_path)

        for p in self._chain():
            state = read_json(p)
            if state is None:
                continue
            if p != self.path:
                log.warning("loaded ledger state from backup %s", p)
            return state
        return None

    def save(self, state: JsonDict) -> None:
        data = json.dumps(state, ensure_ascii=False, sort_keys=True, separators=(",", ":")).encode("utf-8")

        atomic_write_bytes(self.journal_path, b"1")

        # oldest backup is overwritten; the primary becomes bak1
        chain = self._chain()
        for newer, older in reversed(list(zip(chain, chain[1:]))):
            if newer.exists():
                os.replace(newer, older)

        atomic_write_bytes(self.path, data)
        self.journal_path.unlink()


__all__ = ["AtomicLedgerStore", "atomic_write_bytes", "read_json"]
