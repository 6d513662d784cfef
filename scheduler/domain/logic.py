from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone as dt_tz
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..config import (
    DEFAULT_EASINESS,
    FAILED_INTERVAL_DAYS,
    FIRST_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASINESS,
    MIN_QUALITY,
    PASSING_QUALITY,
)


@dataclass(frozen=True)
class SchedulingRecord:
    """SM-2 state of one learner for one card."""

    easiness: float
    interval_days: int
    repetitions: int
    next_review_at: datetime
    last_reviewed_at: Optional[datetime] = None


def add_calendar_days(moment: datetime, days: int) -> datetime:
    # Aware datetimes add timedelta on the wall clock, so the local time of day
    # is kept across DST transitions.
    return moment + timedelta(days=days)


def initialize(now: Optional[datetime] = None) -> SchedulingRecord:
    if now is None:
        now = datetime.now(dt_tz.utc)
    return SchedulingRecord(
        easiness=DEFAULT_EASINESS,
        interval_days=0,
        repetitions=0,
        next_review_at=now,
        last_reviewed_at=None,
    )


def clamp_quality(quality: int) -> int:
    return max(MIN_QUALITY, min(MAX_QUALITY, int(quality)))


def easiness_delta(quality: int) -> float:
    miss = MAX_QUALITY - quality
    return 0.1 - miss * (0.08 + miss * 0.02)


def round_half_away_from_zero(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def next_interval(prev_interval_days: int, repetitions: int, easiness: float, acceptable: bool) -> int:
    if not acceptable:
        return FAILED_INTERVAL_DAYS
    if repetitions in FIRST_INTERVAL_DAYS:
        return FIRST_INTERVAL_DAYS[repetitions]
    # A successful record never drops below one day
    return max(1, round_half_away_from_zero(prev_interval_days * easiness))


def update(record: SchedulingRecord, quality: int, now: datetime) -> SchedulingRecord:
    """Apply one review of the given quality (0-5) and return the new record.

    Out-of-range quality is clamped, never rejected. The input record is left
    untouched; the caller persists the result.
    """
    quality = clamp_quality(quality)
    acceptable = quality >= PASSING_QUALITY

    repetitions = record.repetitions + 1 if acceptable else 0
    easiness = max(MIN_EASINESS, record.easiness + easiness_delta(quality))
    interval_days = next_interval(record.interval_days, repetitions, easiness, acceptable)

    return replace(
        record,
        easiness=easiness,
        interval_days=interval_days,
        repetitions=repetitions,
        next_review_at=add_calendar_days(now, interval_days),
        last_reviewed_at=now,
    )


def is_due(record: SchedulingRecord, now: datetime) -> bool:
    return record.next_review_at <= now
