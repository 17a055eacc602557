from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.utils.translation import gettext_lazy as _


class ReviewValidationError(ValidationError):
    """
    Base for rejected review writes.

    Always carries a field-keyed ``message_dict`` so it merges cleanly into
    ``full_clean()`` and serializer errors.
    """
    field = NON_FIELD_ERRORS
    default_message = _("Invalid review.")
    default_code = "invalid"

    def __init__(self, message=None, code=None, params=None):
        code = code or self.default_code
        super().__init__({
            self.field: [ValidationError(message or self.default_message, code=code, params=params)]
        })
        self.code = code


class MultipleOrNoSubjectError(ReviewValidationError):
    default_message = _("A review must reference exactly one business, tourist spot or event.")
    default_code = "multiple_or_no_subject"


class KindMismatchError(ReviewValidationError):
    field = "review_type"
    default_message = _("Review type does not match the referenced subject.")
    default_code = "kind_mismatch"


class InvalidRatingError(ReviewValidationError):
    field = "rating"
    default_message = _("Rating must be an integer between 1 and 5.")
    default_code = "invalid_rating"


class DanglingReferenceWarning(RuntimeWarning):
    """Recompute was asked for a subject that no longer exists."""
