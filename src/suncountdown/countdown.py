"""Countdown text and the interval tick log shown under it."""

from dataclasses import dataclass, field
from datetime import datetime

TIME_IS_UP = "Time is up!"

MIN_INTERVAL_MS = 1
MAX_INTERVAL_MS = 50_000_000


def format_countdown(seconds: float) -> str:
    """``[Dd ]HH:MM:SS.mmm`` for a non-negative duration."""
    total_seconds = int(seconds)
    ms = int((seconds - total_seconds) * 1000)
    days, rest = divmod(total_seconds, 86400)
    hrs, rest = divmod(rest, 3600)
    mins, secs = divmod(rest, 60)

    text = f"{days}d " if days > 0 else ""
    return text + f"{hrs:02d}:{mins:02d}:{secs:02d}.{ms:03d}"


def countdown_text(now: datetime, target: datetime) -> str:
    if now >= target:
        return TIME_IS_UP
    return format_countdown((target - now).total_seconds())


def clamp_interval(interval_ms: int) -> int:
    return max(MIN_INTERVAL_MS, min(MAX_INTERVAL_MS, int(interval_ms)))


@dataclass
class TickLog:
    """Timestamps recorded at most once per interval, newest first."""

    interval_ms: int = 1000
    entries: list[str] = field(default_factory=list)
    last_logged: datetime | None = None
    max_entries: int = 500

    def set_interval(self, interval_ms: int) -> None:
        self.interval_ms = clamp_interval(interval_ms)

    def tick(self, now: datetime) -> bool:
        """Record ``now`` if a full interval has elapsed. Returns True when logged.

        The first tick only starts the lap.
        """
        if self.last_logged is None:
            self.last_logged = now
            return False
        elapsed_ms = (now - self.last_logged).total_seconds() * 1000
        if elapsed_ms < self.interval_ms:
            return False
        self.entries.insert(0, now.strftime("%d %b %Y %H:%M:%S"))
        del self.entries[self.max_entries :]
        self.last_logged = now
        return True


def edited_target(target: datetime, picked: datetime) -> datetime:
    """Target after the date/time inputs report ``picked``.

    The time input only carries minutes, so a ``picked`` value in the same
    minute as ``target`` is not an edit and keeps the target's seconds.
    """
    if picked == target.replace(second=0, microsecond=0):
        return target
    return picked
