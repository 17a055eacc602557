from django.contrib import admin
from django.db import transaction

from .aggregates import recompute_many
from .models import Booking, Business, Event, Review, TouristSpot

AGGREGATE_FIELDS = ('average_rating', 'review_count')


def _set_approval(queryset, approved):
    """Bulk flip is_approved; update() skips signals, so recompute explicitly."""
    with transaction.atomic():
        refs = [review.subject for review in queryset.exclude(is_approved=approved)]
        updated = queryset.exclude(is_approved=approved).update(is_approved=approved)
        recompute_many(refs)
    return updated


@admin.action(description="Approve selected reviews")
def approve_reviews(modeladmin, request, qs):
    updated = _set_approval(qs, True)
    modeladmin.message_user(request, f"{updated} review(s) approved.")


@admin.action(description="Unapprove selected reviews")
def unapprove_reviews(modeladmin, request, qs):
    updated = _set_approval(qs, False)
    modeladmin.message_user(request, f"{updated} review(s) unapproved.")


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'name', 'business_type', 'status', 'owner',
        'average_rating', 'review_count', 'created_at',
    )
    list_filter = ('status', 'business_type', 'created_at')
    date_hierarchy = 'created_at'
    search_fields = ('id', 'name', 'description', 'owner__email')
    autocomplete_fields = ('owner',)
    readonly_fields = AGGREGATE_FIELDS + ('created_at', 'updated_at')
    ordering = ('-created_at',)
    list_select_related = ('owner',)


@admin.register(TouristSpot)
class TouristSpotAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'location', 'status', 'average_rating', 'review_count')
    list_filter = ('status',)
    search_fields = ('id', 'name', 'location')
    readonly_fields = AGGREGATE_FIELDS + ('created_at', 'updated_at')


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'status', 'start_date', 'end_date', 'average_rating', 'review_count')
    list_filter = ('status', 'start_date')
    search_fields = ('id', 'name', 'created_by__email')
    autocomplete_fields = ('created_by',)
    readonly_fields = AGGREGATE_FIELDS + ('created_at', 'updated_at')
    list_select_related = ('created_by',)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'review_type', 'business', 'tourist_spot', 'event', 'reviewer', 'rating', 'is_approved', 'created_at')
    list_filter = ('is_approved', 'review_type', 'rating', 'created_at')
    date_hierarchy = 'created_at'
    search_fields = ('title', 'comment', 'reviewer__email', 'business__name', 'tourist_spot__name', 'event__name')
    autocomplete_fields = ('reviewer', 'business', 'tourist_spot', 'event')
    readonly_fields = ('created_at', 'updated_at')
    list_select_related = ('reviewer', 'business', 'tourist_spot', 'event')
    actions = (approve_reviews, unapprove_reviews)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'booking_number', 'business', 'guest_email', 'status', 'check_in', 'check_out', 'created_at')
    list_filter = ('status', 'check_in', 'created_at')
    date_hierarchy = 'created_at'
    search_fields = ('booking_number', 'business__name', 'guest__email')
    autocomplete_fields = ('business', 'guest')
    readonly_fields = ('booking_number', 'created_at', 'updated_at')
    ordering = ('-created_at',)
    list_select_related = ('business', 'guest')

    @admin.display(ordering='guest__email', description='Guest')
    def guest_email(self, obj):
        guest = getattr(obj, 'guest', None)
        return getattr(guest, 'email', None)
