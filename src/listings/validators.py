from .exceptions import InvalidRatingError, KindMismatchError, MultipleOrNoSubjectError

RATING_MIN = 1
RATING_MAX = 5


def validate_rating(rating):
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError()
    if not (RATING_MIN <= rating <= RATING_MAX):
        raise InvalidRatingError()


def validate_review(review):
    """
    Check a candidate review before it is written:
      1) exactly one subject FK is set
      2) review_type names that subject's kind
      3) rating is an integer 1..5
    Raises a ReviewValidationError subclass; never touches the database.
    """
    populated = review.populated_subjects
    if len(populated) != 1:
        raise MultipleOrNoSubjectError()

    if review.review_type != populated[0]:
        raise KindMismatchError(
            "Review type %(declared)s does not match the referenced %(actual)s.",
            params={"declared": review.review_type, "actual": populated[0].value},
        )

    validate_rating(review.rating)
