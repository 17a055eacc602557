import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _rating_aggregate_fields():
    return [
        ("average_rating", models.DecimalField(blank=True, decimal_places=2, editable=False, max_digits=3, null=True)),
        ("review_count", models.PositiveIntegerField(default=0, editable=False)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


def _rating_aggregate_constraints(prefix):
    return [
        models.CheckConstraint(
            condition=models.Q(average_rating__isnull=True)
            | models.Q(average_rating__gte=0, average_rating__lte=5),
            name=f"{prefix}_average_rating_range",
        ),
        models.CheckConstraint(
            condition=models.Q(review_count__gte=0),
            name=f"{prefix}_review_count_non_negative",
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Business",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_rating_aggregate_fields(),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("business_type", models.CharField(
                    choices=[
                        ("accommodation", "Accommodation"),
                        ("shop", "Shop"),
                        ("restaurant", "Restaurant"),
                        ("service", "Service"),
                        ("other", "Other"),
                    ],
                    default="other",
                    max_length=20,
                )),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Pending"),
                        ("approved", "Approved"),
                        ("rejected", "Rejected"),
                        ("inactive", "Inactive"),
                    ],
                    db_index=True,
                    default="pending",
                    max_length=20,
                )),
                ("owner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="businesses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name_plural": "businesses",
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [models.Index(fields=["status", "business_type"], name="business_status_type_idx")],
                "constraints": _rating_aggregate_constraints("business"),
            },
        ),
        migrations.CreateModel(
            name="TouristSpot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_rating_aggregate_fields(),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("status", models.CharField(
                    choices=[
                        ("active", "Active"),
                        ("inactive", "Inactive"),
                        ("under_maintenance", "Under maintenance"),
                        ("coming_soon", "Coming soon"),
                    ],
                    db_index=True,
                    default="active",
                    max_length=20,
                )),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "constraints": _rating_aggregate_constraints("touristspot"),
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *_rating_aggregate_fields(),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("status", models.CharField(
                    choices=[
                        ("upcoming", "Upcoming"),
                        ("ongoing", "Ongoing"),
                        ("completed", "Completed"),
                        ("cancelled", "Cancelled"),
                    ],
                    db_index=True,
                    default="upcoming",
                    max_length=20,
                )),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="events", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "indexes": [models.Index(fields=["status", "start_date"], name="event_status_start_idx")],
                "constraints": _rating_aggregate_constraints("event"),
            },
        ),
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("review_type", models.CharField(
                    choices=[("business", "Business"), ("tourist_spot", "Tourist spot"), ("event", "Event")],
                    max_length=20,
                )),
                ("rating", models.PositiveSmallIntegerField()),
                ("title", models.CharField(blank=True, max_length=200)),
                ("comment", models.TextField(blank=True)),
                ("is_approved", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reviewer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to=settings.AUTH_USER_MODEL)),
                ("business", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="listings.business")),
                ("tourist_spot", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="listings.touristspot")),
                ("event", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="listings.event")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["business", "is_approved"], name="review_business_appr_idx"),
                    models.Index(fields=["tourist_spot", "is_approved"], name="review_spot_appr_idx"),
                    models.Index(fields=["event", "is_approved"], name="review_event_appr_idx"),
                    models.Index(fields=["reviewer", "created_at"], name="review_reviewer_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(rating__gte=1, rating__lte=5),
                        name="review_rating_range",
                    ),
                    models.CheckConstraint(
                        condition=(
                            models.Q(review_type="business", business__isnull=False, tourist_spot__isnull=True, event__isnull=True)
                            | models.Q(review_type="tourist_spot", tourist_spot__isnull=False, business__isnull=True, event__isnull=True)
                            | models.Q(review_type="event", event__isnull=False, business__isnull=True, tourist_spot__isnull=True)
                        ),
                        name="review_single_subject_matches_type",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("booking_number", models.CharField(editable=False, max_length=32, unique=True)),
                ("check_in", models.DateField()),
                ("check_out", models.DateField()),
                ("status", models.CharField(
                    choices=[
                        ("pending", "Pending"),
                        ("confirmed", "Confirmed"),
                        ("cancelled", "Cancelled"),
                        ("completed", "Completed"),
                        ("no_show", "No show"),
                    ],
                    default="pending",
                    max_length=10,
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("business", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bookings", to="listings.business")),
                ("guest", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="bookings", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["business", "status", "check_in"], name="booking_business_status_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(check_out__gt=models.F("check_in")),
                        name="booking_checkout_after_checkin",
                    ),
                ],
            },
        ),
    ]
