from rest_framework import serializers

from .localizer import CONTENT_MODELS
from .models import NewsItem

CONTENT_TYPES = list(CONTENT_MODELS)


class ContentTextsSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    description = serializers.CharField(max_length=5000, required=False, allow_blank=True)
    body = serializers.CharField(required=False, allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(), required=False)


class ContentMetadataSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=CONTENT_TYPES)
    priority = serializers.ChoiceField(choices=NewsItem.Priority.choices, required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True)
    order = serializers.IntegerField(min_value=0, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    unit = serializers.CharField(max_length=20, required=False)
    scroll_speed = serializers.IntegerField(min_value=1, required=False)


class ContentUpdateMetadataSerializer(ContentMetadataSerializer):
    type = serializers.ChoiceField(choices=CONTENT_TYPES, required=False)


class ContentCreateSerializer(serializers.Serializer):
    en = ContentTextsSerializer()
    ne = ContentTextsSerializer(required=False, allow_null=True)
    metadata = ContentMetadataSerializer()

    def validate(self, attrs):
        english = attrs["en"]
        if attrs["metadata"]["type"] == "mayor":
            if not any(english.get(name) for name in ("title", "body", "description")):
                raise serializers.ValidationError({"en": "English text is required"})
        elif not english.get("title"):
            raise serializers.ValidationError({"en": "English title is required"})
        return attrs


class ContentUpdateSerializer(serializers.Serializer):
    en = ContentTextsSerializer(required=False)
    ne = ContentTextsSerializer(required=False, allow_null=True)
    metadata = ContentUpdateMetadataSerializer(required=False)


class ContentSearchQuerySerializer(serializers.Serializer):
    text = serializers.CharField(required=False, allow_blank=True)
    language = serializers.ChoiceField(choices=["en", "ne", "both"], default="both")
    content_type = serializers.ChoiceField(choices=CONTENT_TYPES, required=False)
    date_from = serializers.DateTimeField(required=False)
    date_to = serializers.DateTimeField(required=False)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=50)
    offset = serializers.IntegerField(min_value=0, default=0)


class LocalizedContentQuerySerializer(serializers.Serializer):
    language = serializers.ChoiceField(choices=["en", "ne"], default="en")
