# Signal handlers keeping review writes valid and rating aggregates in sync.
# Every ORM save/delete of a Review goes through these, including the admin.

import logging

from django.db.models import QuerySet
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .aggregates import recompute_many
from .models import Review, subject_model
from .validators import validate_review

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Review)
def review_pre_save(sender, instance: Review, raw=False, **kwargs):
    """Reject invalid reviews and remember which subject the row pointed at."""
    if raw:
        return  # fixture loading; reconcile with `recompute_ratings` afterwards
    validate_review(instance)

    instance._previous_subject = None
    if not instance.pk:
        return  # new object, nothing to move away from
    try:
        old = Review.objects.get(pk=instance.pk)
    except Review.DoesNotExist:
        return
    instance._previous_subject = old.subject


@receiver(post_save, sender=Review)
def review_post_save(sender, instance: Review, created, raw=False, **kwargs):
    """Recompute the current subject, and the previous one if the review moved."""
    if raw:
        return
    previous = getattr(instance, "_previous_subject", None)
    instance._previous_subject = None
    current = instance.subject
    if previous is not None and previous != current:
        logger.info("Review %s moved from %s to %s", instance.pk, previous, current)
    recompute_many([current, previous])


def _deleted_with_subject(origin, ref) -> bool:
    """True when the delete that cascaded to this review started at its subject."""
    model = subject_model(ref.kind)
    if isinstance(origin, QuerySet):
        return origin.model is model
    return isinstance(origin, model) and origin.pk == ref.subject_id


@receiver(post_delete, sender=Review)
def review_post_delete(sender, instance: Review, origin=None, **kwargs):
    ref = instance.subject
    if ref is None or _deleted_with_subject(origin, ref):
        return  # the subject row is gone along with its reviews
    recompute_many([ref])
