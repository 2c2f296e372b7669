import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from modeltranslation.fields import TranslationField
from modeltranslation.translator import translator
from modeltranslation.utils import build_localized_fieldname

from core.exceptions import InvalidDataError, NotFoundError

from .models import GalleryItem, MayorMessage, NewsItem, Product

logger = logging.getLogger(__name__)

LANGUAGES = ("en", "ne")

CONTENT_MODELS = {
    model.content_type: model
    for model in (Product, NewsItem, GalleryItem, MayorMessage)
}

PRIORITY_BOOST = {
    NewsItem.Priority.HIGH: 0.5,
    NewsItem.Priority.NORMAL: 0.2,
}


def get_content_model(content_type):
    try:
        return CONTENT_MODELS[content_type]
    except KeyError:
        raise InvalidDataError(f"Unsupported content type: {content_type}", content_type=content_type)


@dataclass(frozen=True)
class ContentRef:
    """Explicit (type, id) address of a content document."""

    content_type: str
    content_id: int

    @classmethod
    def parse(cls, content_type, content_id):
        get_content_model(content_type)
        try:
            pk = int(content_id)
        except (TypeError, ValueError):
            pk = 0
        if pk < 1:
            raise InvalidDataError(f"Invalid content id: {content_id}", content_id=str(content_id))
        return cls(content_type, pk)

    @property
    def model(self):
        return CONTENT_MODELS[self.content_type]


def is_multilingual_field(value):
    return (
        isinstance(value, dict)
        and isinstance(value.get("en"), str)
        and (value.get("ne") is None or isinstance(value.get("ne"), str))
    )


def localize_field(value, language):
    if language == "ne" and value.get("ne"):
        return value["ne"]
    return value["en"]


def field_translations(instance, field_name):
    """``{"en": ..., "ne": ...}`` for a translated field; absent Nepali is omitted."""
    data = {"en": getattr(instance, build_localized_fieldname(field_name, "en")) or ""}
    nepali = getattr(instance, build_localized_fieldname(field_name, "ne"))
    if nepali:
        data["ne"] = nepali
    return data


def set_translation(instance, field_name, language, value):
    setattr(instance, build_localized_fieldname(field_name, language), value)


class ContentLocalizer:
    """
    Bilingual content operations across products, news, gallery items and
    mayor messages.

    Documents are exchanged in a generic shape,
    ``{"en": {title, description, body}, "ne": {...}, "metadata": {...}}``,
    and mapped onto each model's own translated fields.
    """

    def localize_content(self, content, language):
        """
        Replace every ``{"en": ..., "ne": ...}`` value by a single string.

        Nepali is used when requested and present, English otherwise. Lists
        are mapped element-wise and nested dicts are walked recursively;
        anything else is returned unchanged.
        """
        if isinstance(content, list):
            return [self._localize_value(item, language) for item in content]
        if not isinstance(content, dict):
            return content
        return {key: self._localize_value(value, language) for key, value in content.items()}

    def _localize_value(self, value, language):
        if is_multilingual_field(value):
            return localize_field(value, language)
        return self.localize_content(value, language)

    def create_multilingual_content(self, data: Dict[str, Any], user=None) -> Dict[str, Any]:
        metadata = data.get("metadata") or {}
        content_type = metadata.get("type")
        builder = getattr(self, f"_build_{content_type}", None) if content_type in CONTENT_MODELS else None
        if builder is None:
            raise InvalidDataError(f"Unsupported content type: {content_type}", content_type=content_type)

        english = data.get("en") or {}
        nepali = data.get("ne") or {}
        instance = builder(english, nepali, metadata, user)
        instance.is_active = metadata.get("is_active") is not False

        with transaction.atomic():
            self._save(instance)

        logger.info(f"Created {content_type} content {instance.pk}")
        return self.format_document(instance)

    def update_multilingual_content(self, ref: ContentRef, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply the provided non-empty title/description/body texts to the
        document addressed by ``ref``; other fields are left untouched.
        """
        with transaction.atomic():
            instance = self._get(ref, for_update=True)
            for language in LANGUAGES:
                self._apply_texts(instance, language, data.get(language) or {})

            metadata = data.get("metadata") or {}
            if metadata.get("is_active") is not None:
                instance.is_active = metadata["is_active"]
            if metadata.get("priority") and isinstance(instance, NewsItem):
                instance.priority = metadata["priority"]

            self._save(instance)

        logger.info(f"Updated {ref.content_type} content {ref.content_id}")
        return self.format_document(instance)

    def search_multilingual_content(
        self,
        text: Optional[str] = None,
        language: str = "both",
        content_type: Optional[str] = None,
        date_from=None,
        date_to=None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Case-insensitive text search over titles and descriptions.

        Each content type is queried separately (newest first, paginated by
        ``offset``/``limit``), the hits are scored, merged, stably sorted by
        score and cut to ``limit``.
        """
        if content_type:
            models = [get_content_model(content_type)]
        else:
            models = list(CONTENT_MODELS.values())
        languages = LANGUAGES if language == "both" else (language,)

        results = []
        for model in models:
            queryset = model.objects.all()
            if text:
                condition = Q()
                for field_name in self._searchable_fields(model):
                    for lang in languages:
                        condition |= Q(**{f"{build_localized_fieldname(field_name, lang)}__icontains": text})
                queryset = queryset.filter(condition)
            if date_from:
                queryset = queryset.filter(created_at__gte=date_from)
            if date_to:
                queryset = queryset.filter(created_at__lte=date_to)

            page = queryset.order_by("-created_at", "-id")[offset:offset + limit]
            results.extend(self.format_search_result(instance, language) for instance in page)

        results.sort(key=lambda result: result["relevance_score"], reverse=True)
        return results[:limit]

    def get_localized_content(self, ref: ContentRef, language: str) -> Dict[str, Any]:
        instance = self._get(ref)
        return self.localize_content(self.serialize(instance), language)

    # Formatting

    def serialize(self, instance) -> Dict[str, Any]:
        """
        Plain dict of a content instance; translated fields become
        ``{"en", "ne"}`` objects so they can be localized.
        """
        data = {"id": instance.pk, "type": instance.content_type}
        for field in type(instance)._meta.concrete_fields:
            if isinstance(field, TranslationField) or field.primary_key:
                continue
            if field.is_relation:
                data[field.name] = getattr(instance, field.attname)
            elif self._is_translated(type(instance), field.name):
                data[field.name] = field_translations(instance, field.name)
            else:
                data[field.name] = field.value_from_object(instance)
        return data

    def format_document(self, instance) -> Dict[str, Any]:
        model = type(instance)
        content = {}
        for language in LANGUAGES:
            texts = {
                role: getattr(instance, build_localized_fieldname(field_name, language)) or ""
                if field_name else ""
                for role, field_name in self._roles(model).items()
            }
            content[language] = texts

        if not any(content["ne"].values()):
            del content["ne"]

        return {
            "id": instance.pk,
            "content": content,
            "metadata": {
                "type": model.content_type,
                "priority": getattr(instance, "priority", None),
                "is_active": instance.is_active,
                "created_by": instance.owner_id,
            },
            "created_at": instance.created_at,
            "updated_at": instance.updated_at,
        }

    def format_search_result(self, instance, language) -> Dict[str, Any]:
        model = type(instance)
        score = 1.0 + PRIORITY_BOOST.get(getattr(instance, "priority", None), 0)
        return {
            "id": instance.pk,
            "title": field_translations(instance, model.title_field),
            "description": (
                field_translations(instance, model.description_field)
                if model.description_field else {"en": ""}
            ),
            "content_type": model.content_type,
            "language": "en" if language == "both" else language,
            "relevance_score": score,
            "created_at": instance.created_at,
        }

    # Builders

    def _build_product(self, english, nepali, metadata, user):
        product = Product(
            price=metadata.get("price") or 0,
            unit=metadata.get("unit") or "kg",
            images=[],
            farmer=user,
        )
        set_translation(product, "name", "en", english.get("title") or "")
        set_translation(product, "name", "ne", nepali.get("title") or None)
        set_translation(product, "description", "en", english.get("description") or "")
        set_translation(product, "description", "ne", nepali.get("description") or None)
        set_translation(product, "category", "en", metadata.get("category") or "other")
        return product

    def _build_news(self, english, nepali, metadata, user):
        news = NewsItem(
            priority=metadata.get("priority") or NewsItem.Priority.NORMAL,
            published_at=timezone.now(),
            created_by=user,
        )
        set_translation(news, "headline", "en", english.get("title") or "")
        set_translation(news, "headline", "ne", nepali.get("title") or None)
        set_translation(news, "summary", "en", english.get("description") or "")
        set_translation(news, "summary", "ne", nepali.get("description") or None)
        set_translation(news, "content", "en", english.get("body") or english.get("description") or "")
        set_translation(news, "content", "ne", nepali.get("body") or nepali.get("description") or None)
        return news

    def _build_gallery(self, english, nepali, metadata, user):
        item = GalleryItem(
            image_url=metadata.get("image_url") or "",
            order=metadata.get("order") or 0,
            created_by=user,
        )
        set_translation(item, "title", "en", english.get("title") or "")
        set_translation(item, "title", "ne", nepali.get("title") or None)
        set_translation(item, "description", "en", english.get("description") or "")
        set_translation(item, "description", "ne", nepali.get("description") or None)
        set_translation(item, "category", "en", metadata.get("category") or "Other")
        return item

    def _build_mayor(self, english, nepali, metadata, user):
        message = MayorMessage(scroll_speed=metadata.get("scroll_speed") or 50, created_by=user)
        set_translation(message, "text", "en", self._message_text(english))
        set_translation(message, "text", "ne", self._message_text(nepali) or None)
        return message

    # Internals

    def _get(self, ref, for_update=False):
        queryset = ref.model.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        instance = queryset.filter(pk=ref.content_id).first()
        if instance is None:
            raise NotFoundError(
                f"Content with ID {ref.content_id} not found",
                content_type=ref.content_type,
                content_id=ref.content_id,
            )
        return instance

    def _save(self, instance):
        try:
            instance.full_clean()
        except DjangoValidationError as exc:
            raise InvalidDataError.from_validation_error(exc) from exc
        instance.save()

    def _apply_texts(self, instance, language, texts):
        model = type(instance)
        if model.title_field == model.body_field:
            text = self._first_text(texts)
            if text:
                set_translation(instance, model.body_field, language, text)
            return

        # body is applied after description so it wins where both share a field
        for role in ("title", "description", "body"):
            field_name = self._roles(model)[role]
            if field_name and texts.get(role):
                set_translation(instance, field_name, language, texts[role])

    @staticmethod
    def _first_text(texts):
        return texts.get("title") or texts.get("body") or texts.get("description") or ""

    @staticmethod
    def _message_text(texts):
        return texts.get("body") or texts.get("description") or texts.get("title") or ""

    @staticmethod
    def _roles(model):
        return {
            "title": model.title_field,
            "description": model.description_field,
            "body": model.body_field,
        }

    @staticmethod
    def _searchable_fields(model):
        return [name for name in dict.fromkeys((model.title_field, model.description_field)) if name]

    @staticmethod
    def _is_translated(model, field_name):
        return field_name in translator.get_options_for_model(model).fields
