"""
Transactional entry points for reading and writing reviews.

Each write runs in one ``transaction.atomic()`` block: authorization,
validation, a row lock on the affected reviewable(s), the write itself and
the aggregate recompute (fired by the post_save/post_delete receivers as
the last statement before commit).

``authorize`` is an optional ``(action, review) -> bool`` callable supplied
by the caller, e.g. ``src.users.policies.review_policy(user)``. ``None``
means the caller is trusted.
"""
import logging

from django.core.exceptions import PermissionDenied
from django.db import transaction

from . import aggregates
from .exceptions import ReviewValidationError
from .models import Review, subject_field, subject_model
from .validators import validate_review

logger = logging.getLogger(__name__)


def _check(authorize, action, review):
    if authorize is not None and not authorize(action, review):
        raise PermissionDenied(f"Not allowed to {action} review {review.pk or '(new)'}")


def _lock_subjects(*refs):
    """SELECT ... FOR UPDATE on each distinct subject row, in a stable order."""
    seen = sorted({ref for ref in refs if ref is not None})
    for ref in seen:
        model = subject_model(ref.kind)
        list(model.objects.select_for_update().filter(pk=ref.subject_id).values_list("pk", flat=True))


def get_review(review_id, *, authorize=None) -> Review:
    review = Review.objects.select_related("reviewer").get(pk=review_id)
    _check(authorize, "view", review)
    return review


def list_approved_reviews_for(kind, subject_id):
    subject_field(kind)  # raises ValueError on unknown kind
    return Review.objects.for_subject(kind, subject_id).approved().order_by("-created_at")


def upsert_review(review: Review, *, authorize=None) -> Review:
    """Insert or update ``review``; returns it saved."""
    action = "update" if review.pk else "create"
    _check(authorize, action, review)
    try:
        validate_review(review)
    except ReviewValidationError as e:
        logger.info("Rejected review %s (%s): %s", review.pk or "(new)", action, e.code)
        raise

    with transaction.atomic():
        previous = None
        if review.pk:
            old = Review.objects.select_for_update().filter(pk=review.pk).first()
            previous = old.subject if old else None
        _lock_subjects(previous, review.subject)
        review.save()
    return review


def delete_review(review_id, *, authorize=None) -> None:
    with transaction.atomic():
        review = Review.objects.select_for_update().get(pk=review_id)
        _check(authorize, "delete", review)
        _lock_subjects(review.subject)
        review.delete()


def set_review_approval(review_id, approved: bool, *, authorize=None) -> Review:
    """Flip ``is_approved``; a no-op when the flag already has that value."""
    with transaction.atomic():
        review = Review.objects.select_for_update().get(pk=review_id)
        _check(authorize, "approve", review)
        if review.is_approved == bool(approved):
            return review
        _lock_subjects(review.subject)
        review.is_approved = bool(approved)
        review.save(update_fields=["is_approved", "updated_at"])
    logger.info("Review %s %s", review_id, "approved" if approved else "unapproved")
    return review


def update_aggregate(kind, subject_id, average, count) -> int:
    return aggregates.update_aggregate(kind, subject_id, average, count)
