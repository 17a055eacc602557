from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from src.listings.aggregates import recompute_all
from src.listings.models import ReviewKind


class Command(BaseCommand):
    """
    Rebuild average_rating/review_count from approved reviews.

    Safe to run at any time: the recompute is idempotent, so this doubles as
    a reconciliation job after fixture loads or bulk updates.
    """

    help = "Recompute rating aggregates for businesses, tourist spots and events."

    def add_arguments(self, parser):
        parser.add_argument(
            "--kind",
            choices=[k.value for k in ReviewKind],
            default=None,
            help="Only recompute one kind of reviewable.",
        )

    @transaction.atomic
    def handle(self, *args, **opts):
        kind = opts.get("kind")
        try:
            processed = recompute_all(kind)
        except ValueError as e:
            raise CommandError(str(e))

        scope = kind or "all kinds"
        self.stdout.write(self.style.SUCCESS(f"Recomputed ratings for {processed} subject(s) ({scope})."))
