from typing import NamedTuple

from django.db import models
from django.db.models import Q
from django.conf import settings
from django.utils.translation import gettext_lazy as _


class ReviewKind(models.TextChoices):
    BUSINESS = "business", _("Business")
    TOURIST_SPOT = "tourist_spot", _("Tourist spot")
    EVENT = "event", _("Event")


# Kind -> name of the subject FK on Review
SUBJECT_FIELDS = {
    ReviewKind.BUSINESS: "business",
    ReviewKind.TOURIST_SPOT: "tourist_spot",
    ReviewKind.EVENT: "event",
}


class SubjectRef(NamedTuple):
    kind: str
    subject_id: int


def subject_field(kind) -> str:
    try:
        return SUBJECT_FIELDS[ReviewKind(kind)]
    except ValueError:
        raise ValueError(f"Unknown review kind: {kind!r}") from None


def subject_model(kind):
    """Reviewable model class for a review kind."""
    return Review._meta.get_field(subject_field(kind)).related_model


def _single_subject(kind, field):
    others = {f"{other}__isnull": True for other in SUBJECT_FIELDS.values() if other != field}
    return Q(review_type=kind, **{f"{field}__isnull": False}, **others)


class ReviewQuerySet(models.QuerySet):
    def approved(self):
        return self.filter(is_approved=True)

    def for_subject(self, kind, subject_id):
        return self.filter(review_type=kind, **{f"{subject_field(kind)}_id": subject_id})


class Review(models.Model):
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews',
    )
    review_type = models.CharField(max_length=20, choices=ReviewKind.choices)

    # Exactly one of these is set, matching review_type
    business = models.ForeignKey(
        'Business', on_delete=models.CASCADE, related_name='reviews', null=True, blank=True,
    )
    tourist_spot = models.ForeignKey(
        'TouristSpot', on_delete=models.CASCADE, related_name='reviews', null=True, blank=True,
    )
    event = models.ForeignKey(
        'Event', on_delete=models.CASCADE, related_name='reviews', null=True, blank=True,
    )

    rating = models.PositiveSmallIntegerField()
    title = models.CharField(max_length=200, blank=True)
    comment = models.TextField(blank=True)
    is_approved = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReviewQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(rating__gte=1, rating__lte=5),
                name='review_rating_range',
            ),
            models.CheckConstraint(
                condition=(
                    _single_subject(ReviewKind.BUSINESS, "business")
                    | _single_subject(ReviewKind.TOURIST_SPOT, "tourist_spot")
                    | _single_subject(ReviewKind.EVENT, "event")
                ),
                name='review_single_subject_matches_type',
            ),
        ]
        indexes = [
            models.Index(fields=['business', 'is_approved'], name='review_business_appr_idx'),
            models.Index(fields=['tourist_spot', 'is_approved'], name='review_spot_appr_idx'),
            models.Index(fields=['event', 'is_approved'], name='review_event_appr_idx'),
            models.Index(fields=['reviewer', 'created_at'], name='review_reviewer_created_idx'),
        ]

    def __str__(self):
        return f"Review {self.id} on {self.review_type} by {self.reviewer_id} ({self.rating})"

    @property
    def populated_subjects(self):
        """Kinds whose FK is set, regardless of review_type."""
        return [
            kind for kind, field in SUBJECT_FIELDS.items()
            if getattr(self, f"{field}_id") is not None
        ]

    @property
    def subject(self):
        """SubjectRef for the declared kind, or None when its FK is empty."""
        if self.review_type not in SUBJECT_FIELDS:
            return None
        subject_id = getattr(self, f"{SUBJECT_FIELDS[self.review_type]}_id")
        if subject_id is None:
            return None
        return SubjectRef(str(self.review_type), subject_id)

    def set_subject(self, obj):
        """Point the review at a Business, TouristSpot or Event."""
        for kind, field in SUBJECT_FIELDS.items():
            if isinstance(obj, subject_model(kind)):
                self.review_type = kind
                for other in SUBJECT_FIELDS.values():
                    setattr(self, other, obj if other == field else None)
                return
        raise TypeError(f"{type(obj).__name__} cannot be reviewed")

    def clean(self):
        from ..validators import validate_review

        validate_review(self)
