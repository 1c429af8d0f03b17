"""Focus timer statistics: day rollover, session recording and streaks.

Days are compared as ``YYYY-MM-DD`` strings taken from the local clock, never
by subtracting timestamps, so time of day cannot shift a session onto the
wrong day.
"""

import logging
import math
from collections.abc import Callable
from datetime import date, datetime, timedelta

from app.exceptions import InvalidSessionInput
from app.schemas.stats import (
    WINDOW_DAYS,
    DailyMinutes,
    SessionCompleted,
    StatsResponse,
    StatsSnapshot,
)
from app.services.stats_store import StatsStore, default_snapshot

logger = logging.getLogger(__name__)


def day_key(moment: datetime) -> str:
    return moment.date().isoformat()


def previous_day(day: str) -> str:
    return (date.fromisoformat(day) - timedelta(days=1)).isoformat()


def _shift_window(window: list[int], newest: int = 0) -> list[int]:
    return [*window[1:], newest]


def reconcile(snapshot: StatsSnapshot, today: str) -> StatsSnapshot:
    """Roll a snapshot left over from an earlier day forward to ``today``.

    Today's counters are zeroed and the rolling window gets an empty slot for
    today. The streak survives when the last session was yesterday and drops
    to zero once a whole day went by without one. ``last_session_date`` is
    left alone: only recording a session advances it.
    """
    last_day = snapshot.last_session_date
    if last_day is None or last_day == today or snapshot.window_date == today:
        return snapshot

    logger.info("Rolling focus stats over from %s to %s", last_day, today)
    streak = snapshot.streak
    if last_day != previous_day(today):
        if streak:
            logger.info("Streak of %d day(s) lapsed, last session was %s", streak, last_day)
        streak = 0

    return snapshot.model_copy(
        update={
            "sessions_today": 0,
            "total_minutes_today": 0,
            "streak": streak,
            "weekly_data": _shift_window(snapshot.weekly_data),
            "window_date": today,
        }
    )


def validate_duration(value) -> int:
    """Whole, positive, finite minutes or InvalidSessionInput."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSessionInput(f"Session duration must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidSessionInput(
            f"Session duration must be a positive number of minutes, got {value!r}"
        )
    if value != int(value):
        raise InvalidSessionInput(f"Session duration must be whole minutes, got {value!r}")
    return int(value)


def apply_session(snapshot: StatsSnapshot, minutes: int, today: str) -> StatsSnapshot:
    """Fold one completed focus session into a snapshot reconciled for ``today``."""
    if snapshot.last_session_date == today:
        streak = snapshot.streak
        # First session on a day the snapshot already describes
        if snapshot.sessions_today == 0:
            streak += 1
        return snapshot.model_copy(
            update={
                "sessions_today": snapshot.sessions_today + 1,
                "total_minutes_today": snapshot.total_minutes_today + minutes,
                "streak": streak,
                "weekly_data": [*snapshot.weekly_data[:-1], snapshot.weekly_data[-1] + minutes],
                "window_date": today,
            }
        )

    if snapshot.last_session_date == previous_day(today):
        streak = snapshot.streak + 1
    else:
        streak = 1

    if snapshot.window_date == today:
        # Reconciliation already opened today's slot
        window = [*snapshot.weekly_data[:-1], minutes]
    else:
        window = _shift_window(snapshot.weekly_data, minutes)

    return snapshot.model_copy(
        update={
            "sessions_today": 1,
            "total_minutes_today": minutes,
            "streak": streak,
            "weekly_data": window,
            "last_session_date": today,
            "window_date": today,
        }
    )


def build_stats_response(snapshot: StatsSnapshot, today: str) -> StatsResponse:
    newest = date.fromisoformat(snapshot.window_date or snapshot.last_session_date or today)
    breakdown = [
        DailyMinutes(date=newest - timedelta(days=WINDOW_DAYS - 1 - i), minutes=minutes)
        for i, minutes in enumerate(snapshot.weekly_data)
    ]
    return StatsResponse(
        sessions_today=snapshot.sessions_today,
        total_minutes_today=snapshot.total_minutes_today,
        streak=snapshot.streak,
        last_session_date=snapshot.last_session_date,
        weekly_data=list(snapshot.weekly_data),
        week_total_minutes=sum(snapshot.weekly_data),
        daily_breakdown=breakdown,
    )


class FocusStatsTracker:
    """Stats engine behind the focus timer.

    Keeps the last recorded snapshot (what storage holds) and a view of it
    reconciled for the current day. The view is always re-derived from the
    recorded snapshot, so reconciling repeatedly against the same stale day
    gives the same result every time.
    """

    def __init__(self, store: StatsStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.clock = clock
        self._recorded = default_snapshot()
        self.snapshot = self._recorded

    def today(self) -> str:
        return day_key(self.clock())

    async def load(self) -> StatsSnapshot:
        self._recorded = await self.store.load()
        return self.reconcile()

    def reconcile(self) -> StatsSnapshot:
        self.snapshot = reconcile(self._recorded, self.today())
        return self.snapshot

    def stats(self) -> StatsResponse:
        today = self.today()
        self.snapshot = reconcile(self._recorded, today)
        return build_stats_response(self.snapshot, today)

    async def record_session(self, session: SessionCompleted) -> StatsSnapshot:
        if session.type != "focus":
            logger.debug("Ignoring %s session completed at %s", session.type, session.completed_at)
            return self.reconcile()

        try:
            minutes = validate_duration(session.duration_minutes)
        except InvalidSessionInput:
            logger.warning("Rejected focus session: %r", session.duration_minutes)
            raise

        today = self.today()
        updated = apply_session(reconcile(self._recorded, today), minutes, today)
        previous, previous_view = self._recorded, self.snapshot
        self._recorded = self.snapshot = updated
        try:
            await self.store.persist(updated)
        except Exception:
            logger.exception("Failed to persist focus stats, keeping previous snapshot")
            self._recorded, self.snapshot = previous, previous_view
            raise
        return updated

    async def reset(self) -> StatsSnapshot:
        self._recorded = self.snapshot = default_snapshot()
        await self.store.clear()
        return self.snapshot
