from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Countdown:
    days: int
    hours: int
    minutes: int
    seconds: int
    done: bool


def countdown(target_iso: str, now: datetime | None = None) -> Countdown:
    """Time left until `target_iso`, clamped at zero once it has passed."""
    target = datetime.fromisoformat(target_iso)
    now = now or datetime.now(timezone.utc)
    total_seconds = max(0, int((target - now).total_seconds()))

    return Countdown(
        days=total_seconds // (3600 * 24),
        hours=(total_seconds % (3600 * 24)) // 3600,
        minutes=(total_seconds % 3600) // 60,
        seconds=total_seconds % 60,
        done=total_seconds == 0,
    )


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")
