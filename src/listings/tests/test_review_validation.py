from itertools import product

import pytest
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase

from src.listings.exceptions import (
    InvalidRatingError,
    KindMismatchError,
    MultipleOrNoSubjectError,
    ReviewValidationError,
)
from src.listings.factories import BusinessFactory, EventFactory, TouristSpotFactory, UserFactory
from src.listings.models import Review, ReviewKind
from src.listings.serializers import ReviewSerializer
from src.listings.validators import validate_review

FK_FIELDS = ("business_id", "tourist_spot_id", "event_id")
KIND_BY_FK = {
    "business_id": ReviewKind.BUSINESS,
    "tourist_spot_id": ReviewKind.TOURIST_SPOT,
    "event_id": ReviewKind.EVENT,
}


def _review(kind, rating=4, **fks):
    return Review(review_type=kind, rating=rating, reviewer_id=1, **fks)


class TestValidateReview:
    """Pure checks; no database access."""

    def test_every_combination_of_subject_fields(self):
        """Accepted iff exactly one FK is set and review_type names it."""
        for kind, mask in product(list(ReviewKind), product((False, True), repeat=3)):
            fks = {field: 10 + i for i, (field, on) in enumerate(zip(FK_FIELDS, mask)) if on}
            review = _review(kind, **fks)
            populated = [KIND_BY_FK[f] for f in fks]

            if len(populated) != 1:
                with pytest.raises(MultipleOrNoSubjectError):
                    validate_review(review)
            elif populated[0] != kind:
                with pytest.raises(KindMismatchError):
                    validate_review(review)
            else:
                validate_review(review)

    def test_business_and_tourist_spot_both_set_is_rejected(self):
        review = _review(ReviewKind.BUSINESS, business_id=1, tourist_spot_id=2)
        with pytest.raises(MultipleOrNoSubjectError) as exc:
            validate_review(review)
        assert exc.value.code == "multiple_or_no_subject"
        assert NON_FIELD_ERRORS in exc.value.message_dict

    def test_event_kind_with_business_reference_is_rejected(self):
        review = _review(ReviewKind.EVENT, business_id=1)
        with pytest.raises(KindMismatchError) as exc:
            validate_review(review)
        assert exc.value.code == "kind_mismatch"
        assert "review_type" in exc.value.message_dict
        assert "business" in exc.value.message_dict["review_type"][0]

    def test_no_subject_is_rejected(self):
        with pytest.raises(MultipleOrNoSubjectError):
            validate_review(_review(ReviewKind.TOURIST_SPOT))

    @pytest.mark.parametrize("rating", [0, 6, -1, 3.5, "4", None, True])
    def test_invalid_ratings(self, rating):
        review = _review(ReviewKind.EVENT, rating=rating, event_id=3)
        with pytest.raises(InvalidRatingError) as exc:
            validate_review(review)
        assert "rating" in exc.value.message_dict

    @pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
    def test_valid_ratings(self, rating):
        validate_review(_review(ReviewKind.EVENT, rating=rating, event_id=3))

    def test_subject_checks_run_before_rating(self):
        review = _review(ReviewKind.BUSINESS, rating=9)
        with pytest.raises(MultipleOrNoSubjectError):
            validate_review(review)

    def test_errors_are_django_validation_errors(self):
        assert issubclass(ReviewValidationError, ValidationError)
        for cls in (MultipleOrNoSubjectError, KindMismatchError, InvalidRatingError):
            assert issubclass(cls, ReviewValidationError)


class ReviewWriteRejectionTests(TestCase):
    def setUp(self):
        self.user = UserFactory()
        self.business = BusinessFactory()
        self.spot = TouristSpotFactory()
        self.event = EventFactory()

    def test_save_rejects_invalid_review(self):
        review = Review(
            reviewer=self.user, review_type=ReviewKind.BUSINESS,
            business=self.business, tourist_spot=self.spot, rating=5, is_approved=True,
        )
        with self.assertRaises(MultipleOrNoSubjectError):
            review.save()
        self.assertFalse(Review.objects.exists())
        self.business.refresh_from_db()
        self.assertEqual(self.business.review_count, 0)

    def test_full_clean_reports_field_errors(self):
        review = Review(reviewer=self.user, review_type=ReviewKind.EVENT, business=self.business, rating=3)
        with self.assertRaises(ValidationError) as ctx:
            review.full_clean()
        self.assertIn("review_type", ctx.exception.message_dict)

    def test_database_constraint_backs_up_the_validator(self):
        # bulk_create skips signals, so only the CHECK constraint stands in the way
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Review.objects.bulk_create([
                    Review(reviewer=self.user, review_type=ReviewKind.EVENT, business=self.business, rating=3),
                ])

    def test_database_rating_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Review.objects.bulk_create([
                    Review(reviewer=self.user, review_type=ReviewKind.EVENT, event=self.event, rating=7),
                ])

    def test_set_subject_clears_other_references(self):
        review = Review(reviewer=self.user, rating=4, business=self.business)
        review.set_subject(self.spot)
        self.assertEqual(review.review_type, ReviewKind.TOURIST_SPOT)
        self.assertIsNone(review.business_id)
        self.assertEqual(review.tourist_spot_id, self.spot.id)
        validate_review(review)

    def test_set_subject_rejects_non_reviewable(self):
        with self.assertRaises(TypeError):
            Review().set_subject(self.user)


class ReviewSerializerValidationTests(TestCase):
    def setUp(self):
        self.user = UserFactory()
        self.business = BusinessFactory()
        self.event = EventFactory()

    def _ctx(self, user):
        class DummyReq:
            def __init__(self, u):
                self.user = u
        return {"request": DummyReq(user)}

    def test_two_subjects_rejected(self):
        s = ReviewSerializer(
            data={"review_type": "business", "business": self.business.id, "event": self.event.id, "rating": 4},
            context=self._ctx(self.user),
        )
        self.assertFalse(s.is_valid())
        self.assertIn("non_field_errors", s.errors)

    def test_kind_mismatch_rejected(self):
        s = ReviewSerializer(
            data={"review_type": "event", "business": self.business.id, "rating": 4},
            context=self._ctx(self.user),
        )
        self.assertFalse(s.is_valid())
        self.assertIn("review_type", s.errors)

    def test_rating_out_of_range_rejected(self):
        s = ReviewSerializer(
            data={"review_type": "event", "event": self.event.id, "rating": 6},
            context=self._ctx(self.user),
        )
        self.assertFalse(s.is_valid())
        self.assertIn("rating", s.errors)

    def test_valid_payload_creates_unapproved_review(self):
        s = ReviewSerializer(
            data={"review_type": "event", "event": self.event.id, "rating": 5, "comment": "Great fiesta"},
            context=self._ctx(self.user),
        )
        self.assertTrue(s.is_valid(), msg=s.errors)
        review = s.save()
        self.assertEqual(review.reviewer, self.user)
        self.assertFalse(review.is_approved)
        self.event.refresh_from_db()
        # Unapproved reviews never count
        self.assertEqual(self.event.review_count, 0)
        self.assertIsNone(self.event.average_rating)
