from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from .reviewable import Reviewable, ReviewableQuerySet


class EventQuerySet(ReviewableQuerySet):
    public_statuses = ("upcoming", "ongoing")


class Event(Reviewable):
    class Status(models.TextChoices):
        UPCOMING = "upcoming", _("Upcoming")
        ONGOING = "ongoing", _("Ongoing")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='events',
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.UPCOMING,
        db_index=True,
    )

    objects = EventQuerySet.as_manager()

    class Meta(Reviewable.Meta):
        indexes = [
            models.Index(fields=['status', 'start_date'], name='event_status_start_idx'),
        ]

    def __str__(self):
        return self.name
