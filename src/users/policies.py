"""
Role and permission predicates.

These are the capability checks handed to the listings store as the
``authorize`` callable, so the store itself never looks at roles.
"""
from .models import CustomUser, StaffPermission

PERMISSION_FIELDS = {
    "manage_users": "can_manage_users",
    "manage_businesses": "can_manage_businesses",
    "manage_tourist_spots": "can_manage_tourist_spots",
    "manage_events": "can_manage_events",
    "approve_content": "can_approve_content",
    "manage_categories": "can_manage_categories",
}


def _is_authenticated(user) -> bool:
    return bool(user and getattr(user, "is_authenticated", False))


def is_admin(user) -> bool:
    return _is_authenticated(user) and user.role == CustomUser.Role.TOURISM_ADMIN


def is_staff_member(user) -> bool:
    """Admin or any manager role."""
    return _is_authenticated(user) and user.role in CustomUser.STAFF_ROLES


def has_permission(user, permission_name: str) -> bool:
    field = PERMISSION_FIELDS.get(permission_name)
    if field is None or not _is_authenticated(user):
        return False
    try:
        perms = user.staff_permissions
    except StaffPermission.DoesNotExist:
        return False
    return bool(getattr(perms, field))


def can_moderate_reviews(user) -> bool:
    return is_admin(user) or has_permission(user, "approve_content")


def review_policy(user):
    """
    Build an ``authorize(action, review)`` callable for the given user.

    view     approved reviews, staff, the author, or the owner of the reviewed business
    create   author writing under their own id, or moderator
    update   author or moderator
    delete   author or moderator
    approve  moderator only
    """
    uid = getattr(user, "id", None) if _is_authenticated(user) else None

    def authorize(action: str, review) -> bool:
        own = uid is not None and review.reviewer_id == uid

        if action == "view":
            if review.is_approved or own or is_staff_member(user) or can_moderate_reviews(user):
                return True
            business = review.business if review.business_id else None
            return bool(business and uid is not None and business.owner_id == uid)
        if action in ("create", "update", "delete"):
            return own or can_moderate_reviews(user)
        if action == "approve":
            return can_moderate_reviews(user)
        return False

    return authorize
