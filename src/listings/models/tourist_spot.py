from django.db import models
from django.utils.translation import gettext_lazy as _

from .reviewable import Reviewable, ReviewableQuerySet


class TouristSpotQuerySet(ReviewableQuerySet):
    public_statuses = ("active",)


class TouristSpot(Reviewable):
    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        INACTIVE = "inactive", _("Inactive")
        UNDER_MAINTENANCE = "under_maintenance", _("Under maintenance")
        COMING_SOON = "coming_soon", _("Coming soon")

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )

    objects = TouristSpotQuerySet.as_manager()

    def __str__(self):
        return self.name
