from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

SOURCE_WEB = "web"


class Attending(str, Enum):
    YES = "taip"
    UNDECIDED = "gal"
    NO = "ne"


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionStatus.SUCCESS, SubmissionStatus.ERROR)


@dataclass(frozen=True)
class SubmissionState:
    """Status of the latest submission paired with the message shown to the guest."""

    status: SubmissionStatus = SubmissionStatus.IDLE
    message: str = ""


@dataclass(frozen=True)
class WeddingInfo:
    """Static wedding metadata sent along with every RSVP."""

    groom: str = "Deividas"
    bride: str = "Aistė"
    date_iso: str = "2026-06-25T14:00:00+03:00"
    church_name: str = "Kulautuvos bažnyčia"
    church_maps_query: str = "Kulautuvos bažnyčia"
    party_place: str = "Vieta dar tikslinama"

    @property
    def date(self) -> datetime:
        return datetime.fromisoformat(self.date_iso)


WEDDING = WeddingInfo()


@dataclass(frozen=True)
class RsvpDraft:
    """Editable RSVP form state. Edits produce a new draft via `updated`."""

    name: str = ""
    attending: str = Attending.YES.value
    guests: Any = 1
    diet: str = ""
    note: str = ""

    def updated(self, **changes: Any) -> "RsvpDraft":
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RsvpDraft":
        defaults = cls()
        return cls(
            name=data.get("name", defaults.name),
            attending=data.get("attending", defaults.attending),
            guests=data.get("guests", defaults.guests),
            diet=data.get("diet", defaults.diet),
            note=data.get("note", defaults.note),
        )


@dataclass(frozen=True)
class RsvpPayload:
    """Wire body of `POST /api/rsvp`. Built once per submission attempt."""

    wedding: WeddingInfo
    name: str
    attending: str
    guests: int
    diet: str
    note: str
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    source: str = SOURCE_WEB

    @classmethod
    def build(
        cls,
        draft: RsvpDraft,
        guests: int,
        wedding: WeddingInfo = WEDDING,
        submitted_at: datetime | None = None,
    ) -> "RsvpPayload":
        return cls(
            wedding=wedding,
            name=str(draft.name or "").strip(),
            attending=str(draft.attending or "").strip(),
            guests=guests,
            diet=str(draft.diet or "").strip(),
            note=str(draft.note or "").strip(),
            submitted_at=submitted_at or datetime.now(timezone.utc),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "wedding": {
                "groom": self.wedding.groom,
                "bride": self.wedding.bride,
                "dateISO": self.wedding.date_iso,
            },
            "rsvp": {
                "name": self.name,
                "attending": self.attending,
                "guests": self.guests,
                "diet": self.diet,
                "note": self.note,
            },
            "submittedAtISO": _iso_utc(self.submitted_at),
            "source": self.source,
        }


def _iso_utc(value: datetime) -> str:
    # Millisecond precision with a trailing Z, e.g. 2026-05-01T10:00:00.000Z
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
