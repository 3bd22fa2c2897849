import json
import logging
from pathlib import Path
from typing import Protocol

from invitation.rsvp.dtos import RsvpDraft

logger = logging.getLogger(__name__)

DRAFT_KEY = "wedding_rsvp"


class DraftStore(Protocol):
    """Device-resident storage for the most recent draft."""

    def load(self) -> RsvpDraft: ...

    def save(self, draft: RsvpDraft) -> None: ...


class InMemoryDraftStore:
    def __init__(self, draft: RsvpDraft | None = None):
        self.draft = draft
        self.saves = 0

    def load(self) -> RsvpDraft:
        return self.draft or RsvpDraft()

    def save(self, draft: RsvpDraft) -> None:
        self.draft = draft
        self.saves += 1


class JsonFileDraftStore:
    """Key-value JSON file; the draft lives under `key`, other keys are preserved."""

    def __init__(self, path: Path | str, key: str = DRAFT_KEY):
        self._path = Path(path)
        self._key = key

    def _read_all(self) -> dict:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read draft store {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> RsvpDraft:
        stored = self._read_all().get(self._key)
        if not isinstance(stored, dict):
            return RsvpDraft()
        return RsvpDraft.from_dict(stored)

    def save(self, draft: RsvpDraft) -> None:
        data = self._read_all()
        data[self._key] = draft.to_dict()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
