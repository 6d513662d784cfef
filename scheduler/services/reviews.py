from datetime import timezone as dt_tz
from django.db import transaction
from django.utils import timezone
import structlog
from ..data.repos import (
    apply_record,
    find_due,
    get_existing_idempotent,
    get_or_create_schedule_for_update,
    log_to_record,
    persist_review,
    to_record,
)
from ..domain.logic import clamp_quality, update
from ..utils import time as clock
from ..utils.time import to_local_iso

logger = structlog.get_logger()

class _DuplicateReview(Exception):
    def __init__(self, log):
        super().__init__(log.idempotency_key)
        self.log = log

def _local(now):
    # Calendar days are counted in settings.TIME_ZONE
    return clock.now() if now is None else timezone.localtime(now)

def record_review(learner_id, card_id, quality: int, idempotency_key: str, now=None):
    logger.info("review_received",
        learner_id=str(learner_id),
        card_id=str(card_id),
        quality=quality,
        idempotency_key=idempotency_key,
    )

    # Fast path: return current schedule if same idempotency_key
    existing = get_existing_idempotent(learner_id, card_id, idempotency_key)
    if existing:
        return _reuse(learner_id, card_id, existing)

    now = _local(now)
    applied = clamp_quality(quality)
    try:
        with transaction.atomic():
            # Serialize schedule update per (learner, card)
            sched = get_or_create_schedule_for_update(learner_id, card_id, now)
            record = update(to_record(sched), applied, now)

            apply_record(sched, record)
            sched.save(update_fields=[
                "easiness", "interval_days", "repetitions",
                "next_review_at", "last_reviewed_at",
            ])

            log, was_idempotent = persist_review(
                learner_id, card_id, applied, idempotency_key, record
            )
            if was_idempotent:
                # Undo the schedule write; the concurrent request already applied it
                raise _DuplicateReview(log)
    except _DuplicateReview as dup:
        return _reuse(learner_id, card_id, dup.log)

    logger.info("review_scheduled",
        learner_id=str(learner_id),
        card_id=str(card_id),
        quality_applied=applied,
        easiness=record.easiness,
        interval_days=record.interval_days,
        repetitions=record.repetitions,
        next_review_utc=record.next_review_at.astimezone(dt_tz.utc).isoformat(),
        next_review_local=to_local_iso(record.next_review_at),
    )

    return record, log, False

def _reuse(learner_id, card_id, log):
    # A replay answers with the logged result, not the current schedule
    record = log_to_record(log)
    logger.info("idempotent_reuse",
        learner_id=str(learner_id),
        card_id=str(card_id),
        idempotency_key=log.idempotency_key,
        next_review_utc=record.next_review_at.astimezone(dt_tz.utc).isoformat(),
        next_review_local=to_local_iso(record.next_review_at),
    )
    return record, log, True

def due_cards(learner_id, now=None):
    now = _local(now)
    due = find_due(learner_id, now)
    logger.info("due_cards_found",
        learner_id=str(learner_id),
        until_local=now.isoformat(),
        card_count=len(due),
    )
    return due
