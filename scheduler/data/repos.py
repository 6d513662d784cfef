from django.db import transaction, IntegrityError
from ..domain.logic import SchedulingRecord, initialize
from .models import CardSchedule, ReviewLog

def to_record(sched):
    return SchedulingRecord(
        easiness=sched.easiness,
        interval_days=sched.interval_days,
        repetitions=sched.repetitions,
        next_review_at=sched.next_review_at,
        last_reviewed_at=sched.last_reviewed_at,
    )

def log_to_record(log):
    """Schedule as it stood right after the logged review."""
    return SchedulingRecord(
        easiness=log.easiness,
        interval_days=log.interval_days,
        repetitions=log.repetitions,
        next_review_at=log.next_review_at,
        last_reviewed_at=log.created_at,
    )

def apply_record(sched, record):
    for field, value in _record_fields(record).items():
        setattr(sched, field, value)
    return sched

def get_record(learner_id, card_id):
    sched = CardSchedule.objects.filter(learner_id=learner_id, card_id=card_id).first()
    return to_record(sched) if sched else None

def put_record(learner_id, card_id, record):
    CardSchedule.objects.update_or_create(
        learner_id=learner_id, card_id=card_id,
        defaults=_record_fields(record),
    )

def find_due(learner_id, now):
    """
    All (card_id, record) pairs of the learner with next_review_at <= now,
    earliest first.
    """
    qs = (CardSchedule.objects
          .filter(learner_id=learner_id, next_review_at__lte=now)
          .order_by("next_review_at", "card_id"))
    return [(sched.card_id, to_record(sched)) for sched in qs]

def get_or_create_schedule_for_update(learner_id, card_id, now):
    """
    Fetch schedule row and lock it for update to avoid races.
    Create from the default record if missing. The caller must hold the
    surrounding transaction until the schedule is saved.
    """
    try:
        return (CardSchedule.objects
                .select_for_update()
                .get(learner_id=learner_id, card_id=card_id))
    except CardSchedule.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            sched = CardSchedule.objects.create(
                learner_id=learner_id, card_id=card_id,
                **_record_fields(initialize(now)),
            )
    except IntegrityError:
        # Another review created the row first; wait for its lock
        pass
    else:
        return sched

    return (CardSchedule.objects
            .select_for_update()
            .get(learner_id=learner_id, card_id=card_id))

def _record_fields(record):
    return {
        "easiness": record.easiness,
        "interval_days": record.interval_days,
        "repetitions": record.repetitions,
        "next_review_at": record.next_review_at,
        "last_reviewed_at": record.last_reviewed_at,
    }

def get_existing_idempotent(learner_id, card_id, idem_key):
    return ReviewLog.objects.filter(
        learner_id=learner_id, card_id=card_id, idempotency_key=idem_key
    ).first()

def persist_review(learner_id, card_id, quality, idem_key, record):
    """
    Insert ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                learner_id=learner_id, card_id=card_id, quality=quality,
                idempotency_key=idem_key, created_at=record.last_reviewed_at,
                easiness=record.easiness, interval_days=record.interval_days,
                repetitions=record.repetitions,
                next_review_at=record.next_review_at,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        existing = get_existing_idempotent(learner_id, card_id, idem_key)
        return existing, True

def list_reviews(learner_id, card_id):
    return list(
        ReviewLog.objects
        .filter(learner_id=learner_id, card_id=card_id)
        .order_by("-created_at", "-id")
    )
