from .reviewable import Reviewable
from .business import Business
from .tourist_spot import TouristSpot
from .event import Event
from .review import Review, ReviewKind, SubjectRef, SUBJECT_FIELDS, subject_field, subject_model
from .booking import Booking, generate_booking_number

__all__ = [
    "Reviewable",
    "Business",
    "TouristSpot",
    "Event",
    "Review",
    "ReviewKind",
    "SubjectRef",
    "SUBJECT_FIELDS",
    "subject_field",
    "subject_model",
    "Booking",
    "generate_booking_number",
]
