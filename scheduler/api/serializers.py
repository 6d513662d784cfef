from rest_framework import serializers

class ReviewInSerializer(serializers.Serializer):
    learner_id = serializers.UUIDField()
    card_id = serializers.UUIDField()
    # Not range-checked: out-of-range values are clamped by the scheduler
    quality = serializers.IntegerField()
    idempotency_key = serializers.CharField(max_length=64)

class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField(required=False)  # ISO-8601, defaults to now

class ScheduleSerializer(serializers.Serializer):
    easiness = serializers.FloatField()
    interval_days = serializers.IntegerField()
    repetitions = serializers.IntegerField()
    next_review_at = serializers.DateTimeField()
    last_reviewed_at = serializers.DateTimeField(allow_null=True)

class ReviewLogSerializer(serializers.Serializer):
    quality = serializers.IntegerField()
    idempotency_key = serializers.CharField()
    created_at = serializers.DateTimeField()
    easiness = serializers.FloatField()
    interval_days = serializers.IntegerField()
    next_review_at = serializers.DateTimeField()
