from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from .models import (
    KEY_PATTERN,
    LANGUAGE_CODES,
    MAX_TRANSLATION_LENGTH,
    MIN_CONTEXT_LENGTH,
    Namespace,
    TranslationHistory,
    TranslationKey,
)

User = get_user_model()


class TranslationUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name"]


class TranslationsField(serializers.DictField):
    child = serializers.CharField()


class TranslationKeySerializer(serializers.ModelSerializer):
    translations = serializers.SerializerMethodField()
    completeness = serializers.IntegerField(read_only=True)
    updated_by = TranslationUserSerializer(read_only=True)

    class Meta:
        model = TranslationKey
        fields = [
            "id",
            "key",
            "namespace",
            "translations",
            "context",
            "is_required",
            "completeness",
            "current_version",
            "last_updated",
            "updated_by",
            "created_at",
            "updated_at",
        ]

    @extend_schema_field(TranslationsField)
    def get_translations(self, obj):
        return obj.translations


class TranslationTextsSerializer(serializers.Serializer):
    en = serializers.CharField(max_length=MAX_TRANSLATION_LENGTH, required=False, allow_blank=True)
    ne = serializers.CharField(max_length=MAX_TRANSLATION_LENGTH, required=False, allow_blank=True)


class TranslationKeyCreateSerializer(serializers.Serializer):
    key = serializers.RegexField(KEY_PATTERN, min_length=3, max_length=200)
    namespace = serializers.ChoiceField(choices=Namespace.choices)
    translations = TranslationTextsSerializer()
    context = serializers.CharField(max_length=500, required=False, allow_blank=True)
    is_required = serializers.BooleanField(required=False, default=False)

    def validate_translations(self, value):
        if not (value.get("en") or "").strip():
            raise serializers.ValidationError("English translation is required")
        return value

    def validate_context(self, value):
        value = value.strip()
        if value and len(value) < MIN_CONTEXT_LENGTH:
            raise serializers.ValidationError("Context must be at least 5 characters long if provided")
        return value

    def validate(self, attrs):
        if not attrs["key"].startswith(f"{attrs['namespace']}."):
            raise serializers.ValidationError(
                {"namespace": "Namespace must match the beginning of the translation key"}
            )
        return attrs


class TranslationKeyUpdateSerializer(serializers.Serializer):
    translations = TranslationTextsSerializer(required=False)
    context = serializers.CharField(max_length=500, required=False, allow_blank=True)
    is_required = serializers.BooleanField(required=False, allow_null=True, default=None)
    change_reason = serializers.CharField(max_length=500, required=False, allow_blank=True)

    def validate_context(self, value):
        value = value.strip()
        if value and len(value) < MIN_CONTEXT_LENGTH:
            raise serializers.ValidationError("Context must be at least 5 characters long if provided")
        return value


class TranslationHistorySerializer(serializers.ModelSerializer):
    translations = serializers.SerializerMethodField()
    changed_by = TranslationUserSerializer(read_only=True)
    summary = serializers.CharField(source="get_change_summary", read_only=True)

    class Meta:
        model = TranslationHistory
        fields = [
            "id",
            "key",
            "namespace",
            "version",
            "translations",
            "context",
            "is_required",
            "change_type",
            "changed_by",
            "change_reason",
            "summary",
            "created_at",
        ]

    @extend_schema_field(TranslationsField)
    def get_translations(self, obj):
        return obj.translations


class LanguageQuerySerializer(serializers.Serializer):
    language = serializers.ChoiceField(choices=LANGUAGE_CODES)
    namespace = serializers.CharField(required=False, allow_blank=True)


class TranslationKeysQuerySerializer(serializers.Serializer):
    namespace = serializers.CharField(required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)
    is_required = serializers.BooleanField(required=False, allow_null=True, default=None)


class NamespaceQuerySerializer(serializers.Serializer):
    namespace = serializers.CharField(required=False, allow_blank=True)


class ExportQuerySerializer(serializers.Serializer):
    format = serializers.ChoiceField(choices=["json", "csv"], default="json")


class ImportSerializer(serializers.Serializer):
    file = serializers.FileField()
    format = serializers.ChoiceField(choices=["json", "csv"], required=False)


class LimitQuerySerializer(serializers.Serializer):
    namespace = serializers.CharField(required=False, allow_blank=True)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)


class RollbackSerializer(serializers.Serializer):
    version = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True)


class CompareQuerySerializer(serializers.Serializer):
    version1 = serializers.IntegerField(min_value=1)
    version2 = serializers.IntegerField(min_value=1)


class ValidationReportSerializer(serializers.Serializer):
    namespace = serializers.CharField()
    completeness = serializers.FloatField()
    missing_keys = serializers.ListField(child=serializers.CharField())
    required_missing_keys = serializers.ListField(child=serializers.CharField())
    total_keys = serializers.IntegerField()


class ImportResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    imported = serializers.IntegerField()
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    unchanged = serializers.IntegerField()
    errors = serializers.ListField(child=serializers.CharField())
    warnings = serializers.ListField(child=serializers.CharField())
