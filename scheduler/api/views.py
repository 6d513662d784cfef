from rest_framework import views, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
import structlog
import uuid
from ..data.repos import get_record, list_reviews
from ..domain.enums import QUALITY_LABELS
from ..services.reviews import record_review, due_cards
from ..utils import time as clock
from ..utils.time import to_local_iso
from .serializers import (
    DueQuerySerializer,
    ReviewInSerializer,
    ReviewLogSerializer,
    ScheduleSerializer,
)

base_logger = structlog.get_logger()


class ReviewView(views.APIView):
    def post(self, request):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        learner_id = s.validated_data["learner_id"]
        card_id = s.validated_data["card_id"]
        quality = s.validated_data["quality"]
        idem = s.validated_data["idempotency_key"]

        record, log, was_idem = record_review(learner_id, card_id, quality, idem)
        status_code = status.HTTP_200_OK if was_idem else status.HTTP_201_CREATED

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            learner_id=str(learner_id),
            card_id=str(card_id),
            quality=quality,
            quality_applied=log.quality,
            idempotent=was_idem,
            interval_days=record.interval_days,
            next_review_local=to_local_iso(record.next_review_at),
            status=status_code,
        )

        return Response(
            {
                **ScheduleSerializer(record).data,
                "next_review_local": to_local_iso(record.next_review_at),
                "quality_applied": log.quality,
                "quality_label": QUALITY_LABELS[log.quality],
                "idempotent": was_idem,
            },
            status=status_code,
        )


class DueCardsView(views.APIView):
    def get(self, request, learner_id):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data.get("until") or clock.now()

        due = due_cards(learner_id, until)
        cards = [
            {"card_id": str(card_id), **ScheduleSerializer(record).data}
            for card_id, record in due
        ]

        logger.info(
            "due_cards_api_response",
            learner_id=str(learner_id),
            until=until.isoformat(),
            card_count=len(cards),
        )

        return Response(
            {
                "learner_id": str(learner_id),
                "until": until.isoformat(),
                "card_ids": [c["card_id"] for c in cards],
                "cards": cards,
            }
        )


class ScheduleView(views.APIView):
    def get(self, request, learner_id, card_id):
        record = get_record(learner_id, card_id)
        if record is None:
            raise NotFound("No schedule for this learner and card.")
        return Response(
            {
                "learner_id": str(learner_id),
                "card_id": str(card_id),
                **ScheduleSerializer(record).data,
            }
        )


class ReviewHistoryView(views.APIView):
    def get(self, request, learner_id, card_id):
        reviews = list_reviews(learner_id, card_id)
        return Response(
            {
                "learner_id": str(learner_id),
                "card_id": str(card_id),
                "reviews": ReviewLogSerializer(reviews, many=True).data,
            }
        )
