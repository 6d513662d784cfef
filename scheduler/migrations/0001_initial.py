import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CardSchedule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("learner_id", models.UUIDField()),
                ("card_id", models.UUIDField()),
                ("easiness", models.FloatField(default=2.5)),
                ("interval_days", models.PositiveIntegerField(default=0)),
                ("repetitions", models.PositiveIntegerField(default=0)),
                ("next_review_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("last_reviewed_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "indexes": [models.Index(fields=["learner_id", "next_review_at"], name="sched_learner_due_idx")],
                "unique_together": {("learner_id", "card_id")},
            },
        ),
        migrations.CreateModel(
            name="ReviewLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("learner_id", models.UUIDField()),
                ("card_id", models.UUIDField()),
                ("quality", models.SmallIntegerField()),
                ("idempotency_key", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("easiness", models.FloatField()),
                ("interval_days", models.PositiveIntegerField()),
                ("repetitions", models.PositiveIntegerField()),
                ("next_review_at", models.DateTimeField()),
            ],
            options={
                "indexes": [models.Index(fields=["learner_id", "card_id", "created_at"], name="reviewlog_learner_card_idx")],
                "unique_together": {("learner_id", "card_id", "idempotency_key")},
            },
        ),
    ]
