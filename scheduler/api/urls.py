from django.urls import path
from .views import ReviewView, DueCardsView, ScheduleView, ReviewHistoryView

urlpatterns = [
    path("reviews", ReviewView.as_view(), name="review"),
    path("learners/<uuid:learner_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
    path(
        "learners/<uuid:learner_id>/cards/<uuid:card_id>/schedule",
        ScheduleView.as_view(),
        name="schedule",
    ),
    path(
        "learners/<uuid:learner_id>/cards/<uuid:card_id>/reviews",
        ReviewHistoryView.as_view(),
        name="review-history",
    ),
]
