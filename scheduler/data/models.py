from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASINESS

class CardSchedule(models.Model):
    learner_id = models.UUIDField()
    card_id = models.UUIDField()
    easiness = models.FloatField(default=DEFAULT_EASINESS)
    interval_days = models.PositiveIntegerField(default=0)
    repetitions = models.PositiveIntegerField(default=0)
    next_review_at = models.DateTimeField(default=timezone.now)  # UTC
    last_reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "scheduler"
        unique_together = (("learner_id", "card_id"),)
        indexes = [
            models.Index(fields=["learner_id", "next_review_at"], name="sched_learner_due_idx"),
        ]

class ReviewLog(models.Model):
    learner_id = models.UUIDField()
    card_id = models.UUIDField()
    quality = models.SmallIntegerField()  # clamped to 0-5
    idempotency_key = models.CharField(max_length=64)
    created_at = models.DateTimeField(default=timezone.now)
    easiness = models.FloatField()
    interval_days = models.PositiveIntegerField()
    repetitions = models.PositiveIntegerField()
    next_review_at = models.DateTimeField()

    class Meta:
        app_label = "scheduler"
        unique_together = (("learner_id", "card_id", "idempotency_key"),)
        indexes = [
            models.Index(fields=["learner_id", "card_id", "created_at"], name="reviewlog_learner_card_idx"),
        ]
