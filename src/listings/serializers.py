from django.core.exceptions import NON_FIELD_ERRORS, ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework.settings import api_settings

from . import store
from .models import Review, ReviewKind
from .validators import validate_review


class ReviewSerializer(serializers.ModelSerializer):
    reviewer = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Review
        fields = (
            "id", "reviewer", "review_type", "business", "tourist_spot", "event",
            "rating", "title", "comment", "is_approved", "created_at", "updated_at",
        )
        read_only_fields = ("reviewer", "is_approved", "created_at", "updated_at")

    def validate(self, attrs):
        """
        Run the association/rating rules on a transient instance so the
        same rules apply here as on every other write path.
        """
        candidate = Review()
        if self.instance is not None:
            for field in ("review_type", "business", "tourist_spot", "event", "rating"):
                setattr(candidate, field, getattr(self.instance, field))
        for key, value in attrs.items():
            setattr(candidate, key, value)

        try:
            validate_review(candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({
                api_settings.NON_FIELD_ERRORS_KEY if field == NON_FIELD_ERRORS else field: messages
                for field, messages in e.message_dict.items()
            })
        return attrs

    def create(self, validated_data):
        request = self.context.get("request")
        reviewer = validated_data.pop("reviewer", None) or getattr(request, "user", None)
        review = Review(reviewer=reviewer, **validated_data)
        return store.upsert_review(review, authorize=self.context.get("authorize"))

    def update(self, instance, validated_data):
        for key, value in validated_data.items():
            setattr(instance, key, value)
        return store.upsert_review(instance, authorize=self.context.get("authorize"))


class AggregateSerializer(serializers.Serializer):
    """Public projection of a reviewable's derived rating."""
    kind = serializers.ChoiceField(choices=ReviewKind.choices)
    id = serializers.IntegerField()
    average_rating = serializers.DecimalField(max_digits=3, decimal_places=2, allow_null=True)
    review_count = serializers.IntegerField(min_value=0)

    @classmethod
    def for_subject(cls, kind, obj):
        return cls({
            "kind": kind,
            "id": obj.pk,
            "average_rating": obj.average_rating,
            "review_count": obj.review_count,
        })
