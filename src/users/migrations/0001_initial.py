import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import src.users.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="CustomUser",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("is_staff", models.BooleanField(default=False, help_text="Designates whether the user can log into this admin site.", verbose_name="staff status")),
                ("is_active", models.BooleanField(default=True, help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.", verbose_name="active")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="email address")),
                ("first_name", models.CharField(blank=True, max_length=30, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=30, verbose_name="last name")),
                ("phone_number", models.CharField(blank=True, max_length=30, null=True, verbose_name="phone number")),
                ("role", models.CharField(
                    choices=[
                        ("tourist", "Tourist"),
                        ("business_owner", "Business owner"),
                        ("tourism_admin", "Tourism admin"),
                        ("business_listing_manager", "Business listing manager"),
                        ("tourism_content_manager", "Tourism content manager"),
                        ("business_registration_manager", "Business registration manager"),
                    ],
                    db_index=True,
                    default="tourist",
                    max_length=40,
                    verbose_name="role",
                )),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "abstract": False,
            },
            managers=[
                ("objects", src.users.models.CustomUserManager()),
            ],
        ),
        migrations.CreateModel(
            name="StaffPermission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("can_manage_users", models.BooleanField(default=False)),
                ("can_manage_businesses", models.BooleanField(default=False)),
                ("can_manage_tourist_spots", models.BooleanField(default=False)),
                ("can_manage_events", models.BooleanField(default=False)),
                ("can_approve_content", models.BooleanField(default=False)),
                ("can_manage_categories", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="staff_permissions", to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
