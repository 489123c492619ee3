"""Remember the last questions/answers documents between runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Literal, Optional

from .extract import SourceDocument

__all__ = ["Slot", "SLOTS", "StoredDocument", "DocumentStore"]

Slot = Literal["questions", "answers"]
SLOTS: tuple[Slot, ...] = ("questions", "answers")


@dataclass(frozen=True)
class StoredDocument:
    """Metadata about a remembered document."""

    slot: Slot
    name: str
    size: int
    saved_at: str


class DocumentStore:
    """Byte store keyed by slot, living in the workspace ``documents`` dir.

    Each slot keeps the raw bytes (``<slot>.bin``) next to a JSON sidecar
    recording the original file name. Unreadable or half-written entries
    are reported as missing.
    """

    def __init__(
        self,
        root: Path,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.root = Path(root)
        self._now = now or (lambda: datetime.now(timezone.utc))

    def save(self, slot: Slot, document: SourceDocument) -> StoredDocument:
        _check_slot(slot)
        self.root.mkdir(parents=True, exist_ok=True)
        stored = StoredDocument(
            slot=slot,
            name=document.name,
            size=len(document.data),
            saved_at=self._now().isoformat(),
        )
        self._data_path(slot).write_bytes(document.data)
        self._meta_path(slot).write_text(
            json.dumps(
                {
                    "name": stored.name,
                    "size": stored.size,
                    "saved_at": stored.saved_at,
                },
                ensure_ascii=False,
            ),
            encoding="utf-8",
        )
        return stored

    def load(self, slot: Slot) -> Optional[SourceDocument]:
        meta = self.describe(slot)
        if meta is None:
            return None
        data_path = self._data_path(slot)
        if not data_path.is_file():
            return None
        return SourceDocument(name=meta.name, data=data_path.read_bytes())

    def describe(self, slot: Slot) -> Optional[StoredDocument]:
        _check_slot(slot)
        meta_path = self._meta_path(slot)
        if not meta_path.is_file():
            return None
        try:
            raw = json.loads(meta_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if not isinstance(raw, dict) or not raw.get("name"):
            return None
        return StoredDocument(
            slot=slot,
            name=str(raw["name"]),
            size=int(raw.get("size", 0)),
            saved_at=str(raw.get("saved_at", "")),
        )

    def clear(self, slot: Optional[Slot] = None) -> int:
        """Forget ``slot`` (or every slot) and return the removed count."""
        removed = 0
        for target in (slot,) if slot else SLOTS:
            _check_slot(target)
            had_entry = False
            for path in (self._data_path(target), self._meta_path(target)):
                if path.exists():
                    path.unlink()
                    had_entry = True
            removed += int(had_entry)
        return removed

    def _data_path(self, slot: Slot) -> Path:
        return self.root / f"{slot}.bin"

    def _meta_path(self, slot: Slot) -> Path:
        return self.root / f"{slot}.json"


def _check_slot(slot: str) -> None:
    if slot not in SLOTS:
        raise KeyError(f"Unknown document slot '{slot}'.")
