import pytest

from src.listings.factories import BusinessFactory, EventFactory, TouristSpotFactory
from src.listings.models import Business, Event, ReviewKind, TouristSpot, subject_model


@pytest.mark.django_db
class TestPublicVisibility:
    def test_only_approved_businesses_are_public(self):
        approved = BusinessFactory(status=Business.Status.APPROVED)
        BusinessFactory(status=Business.Status.PENDING)
        BusinessFactory(status=Business.Status.REJECTED)
        assert list(Business.objects.public()) == [approved]

    def test_only_active_spots_are_public(self):
        active = TouristSpotFactory(status=TouristSpot.Status.ACTIVE)
        TouristSpotFactory(status=TouristSpot.Status.UNDER_MAINTENANCE)
        TouristSpotFactory(status=TouristSpot.Status.COMING_SOON)
        assert list(TouristSpot.objects.public()) == [active]

    def test_upcoming_and_ongoing_events_are_public(self):
        upcoming = EventFactory(status=Event.Status.UPCOMING)
        ongoing = EventFactory(status=Event.Status.ONGOING)
        EventFactory(status=Event.Status.CANCELLED)
        EventFactory(status=Event.Status.COMPLETED)
        assert set(Event.objects.public()) == {upcoming, ongoing}

    def test_new_reviewables_start_without_rating(self):
        for obj in (BusinessFactory(), TouristSpotFactory(), EventFactory()):
            obj.refresh_from_db()
            assert obj.average_rating is None
            assert obj.review_count == 0


def test_subject_model_dispatch():
    assert subject_model(ReviewKind.BUSINESS) is Business
    assert subject_model("tourist_spot") is TouristSpot
    assert subject_model("event") is Event
    with pytest.raises(ValueError):
        subject_model("hotel")
