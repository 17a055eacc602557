from django.conf import settings
from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    """
    Creates user with email instead of username
    Sets password with set_password()
    Allows to create superuser
    """
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', CustomUser.Role.TOURISM_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    class Role(models.TextChoices):
        TOURIST = "tourist", _("Tourist")
        BUSINESS_OWNER = "business_owner", _("Business owner")
        TOURISM_ADMIN = "tourism_admin", _("Tourism admin")
        BUSINESS_LISTING_MANAGER = "business_listing_manager", _("Business listing manager")
        TOURISM_CONTENT_MANAGER = "tourism_content_manager", _("Tourism content manager")
        BUSINESS_REGISTRATION_MANAGER = "business_registration_manager", _("Business registration manager")

    # Any admin or manager role counts as platform staff
    STAFF_ROLES = (
        Role.TOURISM_ADMIN,
        Role.BUSINESS_LISTING_MANAGER,
        Role.TOURISM_CONTENT_MANAGER,
        Role.BUSINESS_REGISTRATION_MANAGER,
    )

    username = None
    email = models.EmailField(_('email address'), unique=True)

    first_name = models.CharField(_('first name'), max_length=30, blank=True)
    last_name = models.CharField(_('last name'), max_length=30, blank=True)
    phone_number = models.CharField(_('phone number'), max_length=30, blank=True, null=True)
    role = models.CharField(
        _('role'),
        max_length=40,
        choices=Role.choices,
        default=Role.TOURIST,
        db_index=True,
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    def __str__(self):
        return self.email


class StaffPermission(models.Model):
    """Fine-grained capabilities granted to a staff profile."""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='staff_permissions',
    )
    can_manage_users = models.BooleanField(default=False)
    can_manage_businesses = models.BooleanField(default=False)
    can_manage_tourist_spots = models.BooleanField(default=False)
    can_manage_events = models.BooleanField(default=False)
    can_approve_content = models.BooleanField(default=False)
    can_manage_categories = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Permissions for {self.user}"
