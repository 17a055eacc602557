from decimal import Decimal

from django.core.exceptions import PermissionDenied
from django.test import TestCase

from src.listings.factories import BusinessFactory, ReviewFactory, TouristSpotFactory, UserFactory
from src.listings.models import Review, ReviewKind
from src.listings.serializers import AggregateSerializer, ReviewSerializer
from src.users.policies import review_policy


class AggregateSerializerTests(TestCase):
    def setUp(self):
        self.user = UserFactory()
        self.business = BusinessFactory()

    def test_projection_of_rated_subject(self):
        ReviewFactory(reviewer=self.user, business=self.business, rating=4)
        ReviewFactory(reviewer=self.user, business=self.business, rating=5)
        self.business.refresh_from_db()

        data = AggregateSerializer.for_subject("business", self.business).data

        self.assertEqual(dict(data), {
            "kind": "business",
            "id": self.business.id,
            "average_rating": "4.50",
            "review_count": 2,
        })

    def test_no_approved_reviews_gives_null_average(self):
        ReviewFactory(reviewer=self.user, business=self.business, rating=2, is_approved=False)
        self.business.refresh_from_db()

        data = AggregateSerializer.for_subject(ReviewKind.BUSINESS, self.business).data

        self.assertIsNone(data["average_rating"])
        self.assertEqual(data["review_count"], 0)


class ReviewSerializerUpdateTests(TestCase):
    def setUp(self):
        self.user = UserFactory()
        self.business = BusinessFactory()
        self.spot = TouristSpotFactory()
        self.review = ReviewFactory(reviewer=self.user, business=self.business, rating=4)

    def test_rating_change_updates_aggregate(self):
        s = ReviewSerializer(self.review, data={"rating": 2}, partial=True)
        self.assertTrue(s.is_valid(), msg=s.errors)
        s.save()

        self.business.refresh_from_db()
        self.assertEqual((self.business.review_count, self.business.average_rating), (1, Decimal("2.00")))

    def test_moving_review_to_another_subject(self):
        s = ReviewSerializer(
            self.review,
            data={"review_type": "tourist_spot", "tourist_spot": self.spot.id, "business": None},
            partial=True,
        )
        self.assertTrue(s.is_valid(), msg=s.errors)
        review = s.save()

        self.assertEqual(review.tourist_spot_id, self.spot.id)
        self.business.refresh_from_db()
        self.spot.refresh_from_db()
        self.assertEqual((self.business.review_count, self.business.average_rating), (0, None))
        self.assertEqual((self.spot.review_count, self.spot.average_rating), (1, Decimal("4.00")))

    def test_partial_update_keeps_existing_subject_checks(self):
        s = ReviewSerializer(self.review, data={"tourist_spot": self.spot.id}, partial=True)
        self.assertFalse(s.is_valid())
        self.assertIn("non_field_errors", s.errors)

    def test_update_goes_through_authorization(self):
        stranger = UserFactory()
        s = ReviewSerializer(
            self.review, data={"rating": 1}, partial=True,
            context={"authorize": review_policy(stranger)},
        )
        self.assertTrue(s.is_valid(), msg=s.errors)
        with self.assertRaises(PermissionDenied):
            s.save()

        self.assertEqual(Review.objects.get(pk=self.review.pk).rating, 4)
