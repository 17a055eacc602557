import random
from datetime import timedelta

import factory
from django.contrib.auth import get_user_model
from django.utils import timezone
from factory import Faker, LazyFunction, post_generation
from factory.django import DjangoModelFactory

from .models import Booking, Business, Event, Review, ReviewKind, TouristSpot

NAGA_SPOTS = [
    "Naga Metropolitan Cathedral",
    "Plaza Quince Martires",
    "Mt. Isarog Natural Park",
    "Malabsay Falls",
    "Basilica Minore of Our Lady of Penafrancia",
    "Naga River Esplanade",
]

# ---------------------------------------------------------------------------

class UserFactory(DjangoModelFactory):
    """
    Demo user. CustomUser has no 'username' field, so we only set email & names.
    Password is hashed in @post_generation.
    """
    class Meta:
        model = get_user_model()
        django_get_or_create = ("email",)

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = Faker("first_name")
    last_name = Faker("last_name")

    @post_generation
    def password(self, create, extracted, **kwargs):
        pwd = extracted or "Passw0rd!"
        self.set_password(pwd)
        if create:
            self.save()

class BusinessOwnerFactory(UserFactory):
    role = "business_owner"

class AdminFactory(UserFactory):
    role = "tourism_admin"

# ---------------------------------------------------------------------------

class BusinessFactory(DjangoModelFactory):
    class Meta:
        model = Business

    owner = factory.SubFactory(BusinessOwnerFactory)
    name = Faker("company")
    description = Faker("paragraph", nb_sentences=3)
    business_type = factory.LazyFunction(lambda: random.choice(Business.BusinessType.values))
    status = Business.Status.APPROVED

class TouristSpotFactory(DjangoModelFactory):
    class Meta:
        model = TouristSpot

    name = factory.LazyFunction(lambda: random.choice(NAGA_SPOTS))
    description = Faker("paragraph", nb_sentences=3)
    location = "Naga City, Camarines Sur"
    status = TouristSpot.Status.ACTIVE

class EventFactory(DjangoModelFactory):
    class Meta:
        model = Event

    created_by = factory.SubFactory(AdminFactory)
    name = Faker("catch_phrase")
    start_date = LazyFunction(lambda: timezone.localdate() + timedelta(days=random.randint(5, 30)))
    end_date = factory.LazyAttribute(lambda o: o.start_date + timedelta(days=random.randint(0, 3)))
    status = Event.Status.UPCOMING

# ---------------------------------------------------------------------------

class ReviewFactory(DjangoModelFactory):
    """Approved business review by default; pass tourist_spot=/event= with the matching review_type."""
    class Meta:
        model = Review

    class Params:
        for_business = factory.LazyAttribute(lambda o: o.review_type == ReviewKind.BUSINESS)

    reviewer = factory.SubFactory(UserFactory)
    review_type = ReviewKind.BUSINESS
    business = factory.Maybe(
        "for_business",
        yes_declaration=factory.SubFactory(BusinessFactory),
        no_declaration=None,
    )
    rating = factory.LazyFunction(lambda: random.randint(1, 5))
    title = Faker("sentence", nb_words=4)
    comment = Faker("sentence", nb_words=12)
    is_approved = True

class BookingFactory(DjangoModelFactory):
    class Meta:
        model = Booking

    business = factory.SubFactory(BusinessFactory, business_type=Business.BusinessType.ACCOMMODATION)
    guest = factory.SubFactory(UserFactory)
    check_in = LazyFunction(lambda: timezone.localdate() + timedelta(days=random.randint(5, 20)))
    check_out = factory.LazyAttribute(lambda o: o.check_in + timedelta(days=random.randint(1, 5)))
    status = Booking.PENDING
