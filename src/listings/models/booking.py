import secrets

from django.db import models, IntegrityError, transaction
from django.db.models import F, Q
from django.conf import settings
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


def generate_booking_number(today=None) -> str:
    """Human-readable id like NV-20250608-3FA91C."""
    today = today or timezone.localdate()
    prefix = getattr(settings, "BOOKING_NUMBER_PREFIX", "NV")
    return f"{prefix}-{today:%Y%m%d}-{secrets.token_hex(3).upper()}"


class Booking(models.Model):
    """Stay or service booking at a business"""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'
    NO_SHOW = 'no_show'
    STATUS_CHOICES = [
        (PENDING, _('Pending')),
        (CONFIRMED, _('Confirmed')),
        (CANCELLED, _('Cancelled')),
        (COMPLETED, _('Completed')),
        (NO_SHOW, _('No show')),
    ]

    business = models.ForeignKey('Business', on_delete=models.CASCADE, related_name='bookings')
    guest = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')
    booking_number = models.CharField(max_length=32, unique=True, editable=False)
    check_in = models.DateField()
    check_out = models.DateField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out__gt=F('check_in')),
                name='booking_checkout_after_checkin',
            ),
        ]
        indexes = [
            models.Index(fields=['business', 'status', 'check_in'], name='booking_business_status_idx'),
        ]

    def __str__(self):
        return f"{self.booking_number} {self.guest} → {self.business} [{self.status}]"

    def clean(self):
        from django.core.exceptions import ValidationError

        if self.check_in and self.check_out and self.check_out <= self.check_in:
            raise ValidationError({'check_out': _('Check-out must be after check-in.')})

    def save(self, *args, **kwargs):
        if self.booking_number:
            return super().save(*args, **kwargs)

        attempts = int(getattr(settings, "BOOKING_NUMBER_ATTEMPTS", 5))
        for _attempt in range(attempts):
            self.booking_number = generate_booking_number()
            try:
                # Savepoint so a collision does not poison an outer transaction
                with transaction.atomic():
                    return super().save(*args, **kwargs)
            except IntegrityError:
                if not Booking.objects.filter(booking_number=self.booking_number).exists():
                    raise
        self.booking_number = ""
        raise RuntimeError(f"Could not assign a unique booking number after {attempts} attempts")
