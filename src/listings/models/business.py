from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from .reviewable import Reviewable, ReviewableQuerySet


class BusinessQuerySet(ReviewableQuerySet):
    public_statuses = ("approved",)


class Business(Reviewable):
    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")
        INACTIVE = "inactive", _("Inactive")

    class BusinessType(models.TextChoices):
        ACCOMMODATION = "accommodation", _("Accommodation")
        SHOP = "shop", _("Shop")
        RESTAURANT = "restaurant", _("Restaurant")
        SERVICE = "service", _("Service")
        OTHER = "other", _("Other")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='businesses',
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    business_type = models.CharField(
        max_length=20,
        choices=BusinessType.choices,
        default=BusinessType.OTHER,
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    objects = BusinessQuerySet.as_manager()

    class Meta(Reviewable.Meta):
        verbose_name_plural = "businesses"
        indexes = [
            models.Index(fields=['status', 'business_type'], name='business_status_type_idx'),
        ]

    def __str__(self):
        return self.name
