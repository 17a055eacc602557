"""
Derived rating aggregates.

A reviewable's ``average_rating``/``review_count`` are always recomputed
from scratch out of its approved reviews, so every function here can be
re-run at any time with the same result.
"""
import logging
import warnings
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional

from django.db.models import Count, Sum

from .exceptions import DanglingReferenceWarning
from .models import Review, ReviewKind, SubjectRef, subject_model

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


class Aggregate(NamedTuple):
    average_rating: Optional[Decimal]
    review_count: int


def compute_aggregate(kind, subject_id) -> Aggregate:
    """Read-only: aggregate of the approved reviews for one subject."""
    stats = (
        Review.objects.for_subject(kind, subject_id)
        .approved()
        .aggregate(total=Sum("rating"), count=Count("id"))
    )
    count = stats["count"] or 0
    if not count:
        return Aggregate(None, 0)
    average = (Decimal(stats["total"]) / count).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return Aggregate(average, count)


def update_aggregate(kind, subject_id, average, count) -> int:
    """Write the pair onto the reviewable row; returns rows updated."""
    model = subject_model(kind)
    return model.objects.filter(pk=subject_id).update(average_rating=average, review_count=count)


def recompute(kind, subject_id) -> Optional[Aggregate]:
    aggregate = compute_aggregate(kind, subject_id)
    updated = update_aggregate(kind, subject_id, aggregate.average_rating, aggregate.review_count)
    if not updated:
        message = f"Recompute skipped: {kind} {subject_id} does not exist"
        logger.warning(message)
        warnings.warn(message, DanglingReferenceWarning, stacklevel=2)
        return None

    logger.debug(
        "Recomputed %s %s: average=%s count=%s",
        kind, subject_id, aggregate.average_rating, aggregate.review_count,
    )
    return aggregate


def recompute_many(refs):
    """Recompute each distinct SubjectRef once; returns {ref: Aggregate | None}."""
    results = {}
    for ref in refs:
        if ref is None:
            continue
        ref = SubjectRef(str(ref.kind), ref.subject_id)
        if ref in results:
            continue
        results[ref] = recompute(ref.kind, ref.subject_id)
    return results


def recompute_all(kind=None) -> int:
    """Reconcile every reviewable (or every one of ``kind``); returns how many."""
    kinds = [ReviewKind(kind)] if kind else list(ReviewKind)
    processed = 0
    for k in kinds:
        for subject_id in list(subject_model(k).objects.values_list("pk", flat=True)):
            recompute(k.value, subject_id)
            processed += 1
    logger.info("Reconciled rating aggregates for %s subjects", processed)
    return processed
