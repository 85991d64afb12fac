"""
NameScout - Persistent Counter Store
Durable JSON document holding the global daily AI counter and the
per-client cooldown expiries. Survives process restarts.

The document is read-modify-written on every access. Callers that mutate
it hold ``store.lock`` across the whole load → mutate → save cycle, which
makes the cycle single-writer inside one process. Separate processes
sharing the same file can still lose updates.
"""
import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger("namescout.store")

Clock = Callable[[], float]


# ═══════════════════════════════════════════════════════
#  Time helpers (UTC calendar days)
# ═══════════════════════════════════════════════════════


def now_ms(clock: Clock) -> int:
    """Current clock reading in epoch milliseconds."""
    return round(clock() * 1000)


def utc_today(clock: Clock) -> str:
    """Today's UTC date as ``YYYY-MM-DD``."""
    return datetime.fromtimestamp(clock(), tz=timezone.utc).date().isoformat()


def next_utc_midnight(clock: Clock) -> datetime:
    """Start of the next UTC calendar day."""
    today = datetime.fromtimestamp(clock(), tz=timezone.utc).date()
    tomorrow = today + timedelta(days=1)
    return datetime(tomorrow.year, tomorrow.month, tomorrow.day, tzinfo=timezone.utc)


# ═══════════════════════════════════════════════════════
#  Persisted document
# ═══════════════════════════════════════════════════════


class GlobalQuotaRecord(BaseModel):
    """Usage count for a single UTC day. ``count`` is meaningless for other days."""

    model_config = {"populate_by_name": True}

    count: int = Field(0, ge=0)
    reset_date: str = Field("", alias="resetDate")


class CooldownEntry(BaseModel):
    """Epoch-millisecond instant until which a client is locked out."""

    until: int


class RateLimitState(BaseModel):
    """Everything the store persists, serialized as one JSON document."""

    model_config = {"populate_by_name": True}

    global_quota: GlobalQuotaRecord = Field(
        default_factory=GlobalQuotaRecord, alias="global"
    )
    cooldowns: dict[str, CooldownEntry] = Field(default_factory=dict)


# ═══════════════════════════════════════════════════════
#  Store
# ═══════════════════════════════════════════════════════


class QuotaStore:
    """
    File-backed owner of :class:`RateLimitState`.

    ``load`` never raises: a missing, unreadable or malformed document
    degrades to a fresh zero-valued state for today. ``save`` never raises
    either; write failures are logged and the request path carries on.

    While writes are failing, the last state handed to ``save`` is kept in
    memory and ``load`` returns it instead of the disk, so an unwritable
    path cannot reset the counters on every request. The first successful
    save clears it.
    """

    def __init__(self, path: Union[str, Path], clock: Clock = time.time):
        self.path = Path(path)
        self._clock = clock
        self.lock = threading.RLock()
        self._unsaved: Optional[RateLimitState] = None

    def default_state(self) -> RateLimitState:
        return RateLimitState(
            global_quota=GlobalQuotaRecord(count=0, reset_date=utc_today(self._clock)),
        )

    def load(self) -> RateLimitState:
        """Read the document, falling back to a fresh state on any problem."""
        if self._unsaved is not None:
            return self._unsaved.model_copy(deep=True)

        if not self.path.exists():
            return self.default_state()

        try:
            raw = self.path.read_text(encoding="utf-8")
            return RateLimitState.model_validate_json(raw)
        except (OSError, ValueError) as exc:
            # ValueError covers both JSON decoding and pydantic validation
            logger.warning(
                "Rate limit document %s unreadable, starting fresh: %s",
                self.path, exc,
            )
            return self.default_state()

    def save(self, state: RateLimitState) -> None:
        """Write the document; failures are logged, never raised."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                state.model_dump_json(by_alias=True, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.error("Failed to save rate limit document %s: %s", self.path, exc)
            self._unsaved = state.model_copy(deep=True)
        else:
            self._unsaved = None
