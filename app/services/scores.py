"""
Daily score aggregator: a user's check-in history as a day-keyed map.

    store.fetch_checkins(user_id)      -> [CheckinRecord, ...]  newest first
    build_day_status_map(records)      -> {"YYYY-MM-DD": DayStatus}

The map is keyed, not ordered. If the store returns two records for the
same civil day, the one processed later (fetch order) replaces the earlier.

Fetch failures never reach the consumer as exceptions. Internally they are
carried in a FetchResult; DailyScoreLoader collapses them to an empty
(or, with retain_previous, the previous) map with is_loading=False.

Loader lifecycle, per user_id:

    Idle (no user_id) -> Loading -> Ready(map) | Ready(empty, error)

Loading is re-entered only for a new distinct user_id. Each begin() bumps a
generation token; a settle() carrying an older token is dropped, so a slow
response for a previous user can never overwrite the current map.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import CheckinFetchError
from app.models.checkin import CheckinStatus, SmartyCheckin

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CheckinRecord:
    """Read-only projection of one stored check-in."""
    checkin_date: str
    daily_score: Optional[float] = None
    score_category: Optional[str] = None
    morning_completed: bool = False
    night_completed: bool = False
    status: str = CheckinStatus.missed.value

    @classmethod
    def from_row(cls, row: Any) -> "CheckinRecord":
        """Build from an ORM row or a mapping using the store's column names."""
        get = row.get if isinstance(row, dict) else (lambda name, default=None: getattr(row, name, default))
        day = get("checkin_date")
        if isinstance(day, date):
            day = day.isoformat()
        category = get("score_category")
        return cls(
            checkin_date=str(day),
            daily_score=get("daily_smarty_score"),
            score_category=category.value if hasattr(category, "value") else category,
            morning_completed=bool(get("morning_completed", False)),
            night_completed=bool(get("night_completed", False)),
            status=get("status") or CheckinStatus.missed.value,
        )


@dataclass(frozen=True)
class DayStatus:
    score: Optional[float] = None
    category: Optional[str] = None
    morning_completed: bool = False
    night_completed: bool = False


DayStatusMap = dict[str, DayStatus]


@dataclass
class FetchResult:
    scores: DayStatusMap = field(default_factory=dict)
    error: Optional[CheckinFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScoresSnapshot:
    """What a consumer sees: the map plus the loading flag."""
    scores_by_date: DayStatusMap
    is_loading: bool


class LoadState(str, enum.Enum):
    idle = "idle"
    loading = "loading"
    ready = "ready"


# ---------------------------------------------------------------------------
# Record store
# ---------------------------------------------------------------------------

class CheckinStore(Protocol):
    def fetch_checkins(self, user_id: str) -> list[CheckinRecord]:
        """All of the user's check-ins, newest day first. Raises CheckinFetchError."""
        ...


class SqlCheckinStore:
    def __init__(self, db: Session):
        self.db = db

    def fetch_checkins(self, user_id: str) -> list[CheckinRecord]:
        try:
            rows = (
                self.db.query(SmartyCheckin)
                .filter(SmartyCheckin.user_id == user_id)
                .order_by(SmartyCheckin.checkin_date.desc(), SmartyCheckin.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise CheckinFetchError(user_id, reason=str(exc)) from exc
        return [CheckinRecord.from_row(r) for r in rows]


# ---------------------------------------------------------------------------
# Pure aggregation
# ---------------------------------------------------------------------------

def project(record: CheckinRecord) -> DayStatus:
    return DayStatus(
        score=record.daily_score,
        category=record.score_category,
        morning_completed=record.morning_completed,
        night_completed=record.night_completed,
    )


def build_day_status_map(records: Iterable[CheckinRecord]) -> DayStatusMap:
    scores: DayStatusMap = {}
    for record in records:
        scores[record.checkin_date] = project(record)
    return scores


def fetch_scores_by_date(store: CheckinStore, user_id: str) -> FetchResult:
    try:
        return FetchResult(scores=build_day_status_map(store.fetch_checkins(user_id)))
    except CheckinFetchError as exc:
        return FetchResult(error=exc)
    except Exception as exc:
        # Any store failure ends the load; the caller only ever sees a FetchResult.
        return FetchResult(error=CheckinFetchError(user_id, reason=str(exc) or type(exc).__name__))


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class DailyScoreLoader:
    """Holds one consumer's day-keyed view of one user's check-ins."""

    def __init__(self, store: CheckinStore, retain_previous: bool = False):
        self.store = store
        self.retain_previous = retain_previous
        self.state = LoadState.idle
        self.user_id: Optional[str] = None
        self.scores_by_date: DayStatusMap = {}
        self.last_error: Optional[CheckinFetchError] = None
        self._generation = 0

    @property
    def is_loading(self) -> bool:
        return self.state == LoadState.loading

    def snapshot(self) -> ScoresSnapshot:
        return ScoresSnapshot(scores_by_date=dict(self.scores_by_date), is_loading=self.is_loading)

    def begin(self, user_id: Optional[str]) -> Optional[int]:
        """
        Start a load for `user_id` and return its generation token.

        Returns None (and goes Idle) when there is no user to load for.
        """
        self._generation += 1
        self.user_id = user_id or None
        self.last_error = None
        if not user_id:
            self.state = LoadState.idle
            self.scores_by_date = {}
            return None
        self.state = LoadState.loading
        return self._generation

    def settle(self, token: Optional[int], result: FetchResult) -> bool:
        """Apply a fetch result; returns False if the token is stale."""
        if token is None or token != self._generation:
            logger.debug("Dropping stale check-in scores (token=%s current=%s)", token, self._generation)
            return False
        if result.ok:
            self.scores_by_date = result.scores
        else:
            logger.warning("Check-in scores fetch failed for user %s: %s", self.user_id, result.error)
            self.last_error = result.error
            if not self.retain_previous:
                self.scores_by_date = {}
        self.state = LoadState.ready
        return True

    def load(self, user_id: Optional[str]) -> ScoresSnapshot:
        if user_id and user_id == self.user_id and self.state == LoadState.ready:
            return self.snapshot()
        token = self.begin(user_id)
        if token is not None:
            self.settle(token, fetch_scores_by_date(self.store, user_id))
        return self.snapshot()

    def discard(self) -> None:
        """Forget everything; any in-flight result becomes stale."""
        self._generation += 1
        self.state = LoadState.idle
        self.user_id = None
        self.scores_by_date = {}
        self.last_error = None


def load_scores(store: CheckinStore, user_id: Optional[str]) -> ScoresSnapshot:
    return DailyScoreLoader(store).load(user_id)
