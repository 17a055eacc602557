from django.db import models
from django.db.models import Q


class ReviewableQuerySet(models.QuerySet):
    # Statuses visible to anonymous visitors; set per concrete model
    public_statuses = ()

    def public(self):
        return self.filter(status__in=self.public_statuses)


class Reviewable(models.Model):
    """
    Base for anything that can be reviewed.

    ``average_rating`` and ``review_count`` are derived from approved reviews
    and are only written by the aggregate recalculator.
    """
    average_rating = models.DecimalField(
        max_digits=3, decimal_places=2, null=True, blank=True, editable=False,
    )
    review_count = models.PositiveIntegerField(default=0, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        constraints = [
            models.CheckConstraint(
                condition=Q(average_rating__isnull=True)
                | Q(average_rating__gte=0, average_rating__lte=5),
                name="%(class)s_average_rating_range",
            ),
            models.CheckConstraint(
                condition=Q(review_count__gte=0),
                name="%(class)s_review_count_non_negative",
            ),
        ]
        ordering = ["-created_at"]
