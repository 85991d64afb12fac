"""
NameScout - AI Admission Control
Decides whether a client may trigger an expensive name-generation call.

  1. CooldownGate      - per-client lockout after each admitted request
  2. GlobalDailyQuota  - process-wide cap per UTC calendar day
  3. AdmissionGate     - cooldown first, then quota; cooldown is only set
                         once both pass

All three read and write through the same QuotaStore and hold its lock
across each load → mutate → save cycle. Day rollover is lazy: the stored
counter is reconciled with today's date at the top of every access.
"""
import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from namescout.services.quota_store import (
    Clock,
    CooldownEntry,
    QuotaStore,
    RateLimitState,
    next_utc_midnight,
    now_ms,
    utc_today,
)

logger = logging.getLogger("namescout.quota")

DAILY_LIMIT_REASON = "Daily global limit reached. Please try again tomorrow."


@dataclass(frozen=True)
class CooldownStatus:
    allowed: bool
    remaining_ms: Optional[int] = None


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    reset_time: datetime
    reason: Optional[str] = None
    remaining: Optional[int] = None


@dataclass(frozen=True)
class QuotaStatus:
    remaining: int
    total: int
    reset_time: datetime


@dataclass(frozen=True)
class AdmissionDecision:
    allowed: bool
    reason: Optional[str] = None
    remaining_ms: Optional[int] = None
    remaining: Optional[int] = None
    reset_time: Optional[datetime] = None
    retry_after: int = 0


# ═══════════════════════════════════════════════════════
#  Cooldown Gate
# ═══════════════════════════════════════════════════════


class CooldownGate:
    """Per-client lockout of ``cooldown_ms`` after each admitted request."""

    def __init__(
        self,
        store: QuotaStore,
        cooldown_ms: int = 60_000,
        sweep_threshold: int = 50,
        clock: Clock = time.time,
    ):
        self._store = store
        self.cooldown_ms = cooldown_ms
        self.sweep_threshold = sweep_threshold
        self._clock = clock

    def check_cooldown(self, client_id: str) -> CooldownStatus:
        """
        Report whether ``client_id`` is currently locked out.

        Expired entries are swept from the document once it tracks more
        than ``sweep_threshold`` clients.
        """
        with self._store.lock:
            state = self._store.load()
            now = now_ms(self._clock)

            record = state.cooldowns.get(client_id)
            if record is not None and record.until > now:
                return CooldownStatus(allowed=False, remaining_ms=record.until - now)

            if len(state.cooldowns) > self.sweep_threshold:
                self._sweep(state, now)
                self._store.save(state)

            return CooldownStatus(allowed=True)

    def set_cooldown(self, client_id: str) -> None:
        with self._store.lock:
            state = self._store.load()
            until = now_ms(self._clock) + self.cooldown_ms
            state.cooldowns[client_id] = CooldownEntry(until=until)
            self._store.save(state)

    @staticmethod
    def _sweep(state: RateLimitState, now: int) -> None:
        expired = [key for key, entry in state.cooldowns.items() if entry.until <= now]
        for key in expired:
            del state.cooldowns[key]
        logger.debug("Swept %d expired cooldown(s)", len(expired))


# ═══════════════════════════════════════════════════════
#  Global Daily Quota
# ═══════════════════════════════════════════════════════


class GlobalDailyQuota:
    """Caps expensive operations per UTC day, whoever issues them."""

    def __init__(self, store: QuotaStore, daily_limit: int = 50, clock: Clock = time.time):
        self._store = store
        self.daily_limit = daily_limit
        self._clock = clock

    def _rollover(self, state: RateLimitState) -> None:
        today = utc_today(self._clock)
        if state.global_quota.reset_date != today:
            state.global_quota.count = 0
            state.global_quota.reset_date = today

    def check_and_consume(self) -> QuotaDecision:
        """Consume one slot if any are left. Denials never touch the counter."""
        with self._store.lock:
            state = self._store.load()
            self._rollover(state)
            reset_time = next_utc_midnight(self._clock)

            if state.global_quota.count >= self.daily_limit:
                logger.info(
                    "Global daily AI quota exhausted (%d/%d)",
                    state.global_quota.count, self.daily_limit,
                )
                return QuotaDecision(
                    allowed=False,
                    reason=DAILY_LIMIT_REASON,
                    reset_time=reset_time,
                )

            state.global_quota.count += 1
            self._store.save(state)

            return QuotaDecision(
                allowed=True,
                remaining=self.daily_limit - state.global_quota.count,
                reset_time=reset_time,
            )

    def get_status(self) -> QuotaStatus:
        """Read-only view, with the day rollover applied virtually."""
        state = self._store.load()
        reset_time = next_utc_midnight(self._clock)

        if state.global_quota.reset_date != utc_today(self._clock):
            used = 0
        else:
            used = state.global_quota.count

        return QuotaStatus(
            remaining=max(0, self.daily_limit - used),
            total=self.daily_limit,
            reset_time=reset_time,
        )


# ═══════════════════════════════════════════════════════
#  Admission Gate
# ═══════════════════════════════════════════════════════


class AdmissionGate:
    """
    Single allow/deny decision in front of the name generator.

    The cooldown is checked strictly before the quota, so an impatient
    client never burns a daily slot. A quota denial does not start a new
    cooldown.
    """

    def __init__(
        self,
        store: QuotaStore,
        cooldown: CooldownGate,
        quota: GlobalDailyQuota,
        clock: Clock = time.time,
    ):
        self._store = store
        self.cooldown = cooldown
        self.quota = quota
        self._clock = clock

    def request_expensive_operation(self, client_id: str) -> AdmissionDecision:
        with self._store.lock:
            cooldown = self.cooldown.check_cooldown(client_id)
            if not cooldown.allowed:
                wait_seconds = math.ceil((cooldown.remaining_ms or 0) / 1000)
                logger.info("AI request from %s rejected: cooldown %ds", client_id, wait_seconds)
                return AdmissionDecision(
                    allowed=False,
                    reason=f"Please wait {wait_seconds} seconds before generating again.",
                    remaining_ms=cooldown.remaining_ms,
                    retry_after=max(1, wait_seconds),
                )

            decision = self.quota.check_and_consume()
            if not decision.allowed:
                until_reset = decision.reset_time.timestamp() - self._clock()
                return AdmissionDecision(
                    allowed=False,
                    reason=decision.reason,
                    reset_time=decision.reset_time,
                    retry_after=max(1, math.ceil(until_reset)),
                )

            self.cooldown.set_cooldown(client_id)

        logger.info(
            "AI request from %s admitted (%d left today)", client_id, decision.remaining,
        )
        return AdmissionDecision(
            allowed=True,
            remaining=decision.remaining,
            reset_time=decision.reset_time,
        )

    def status(self, client_id: str) -> tuple[QuotaStatus, CooldownStatus]:
        """Quota and cooldown snapshot for the status endpoints."""
        with self._store.lock:
            return self.quota.get_status(), self.cooldown.check_cooldown(client_id)
