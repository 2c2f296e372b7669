import csv
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from configuration.utils import get_config, get_int_config
from core.exceptions import ConflictError, InvalidDataError, NotFoundError, ServiceError

from .filters import TranslationKeyFilter
from .helpers import (
    EXPORT_COLUMNS,
    csv_header,
    decode_upload,
    flatten_dict,
    iter_csv_rows,
    parse_bool,
    rows_to_csv,
    set_nested_value,
    strip_namespace,
)
from .models import LANGUAGE_CODES, ChangeType, TranslationHistory, TranslationKey

User = get_user_model()
logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv")
BUNDLE_GENERATION_KEY = "translations_bundle_generation"


@dataclass
class ValidationReport:
    namespace: str
    completeness: float
    missing_keys: List[str]
    total_keys: int
    required_missing_keys: List[str] = field(default_factory=list)


@dataclass
class ImportResult:
    success: bool = False
    imported: int = 0
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def bundle_cache_key(language, namespace=None):
    generation = cache.get_or_set(BUNDLE_GENERATION_KEY, 1, None)
    return f"translations_bundle:{generation}:{language}:{namespace or 'all'}"


def invalidate_translation_bundles():
    """Drop every cached bundle by moving to a new cache generation."""
    try:
        cache.incr(BUNDLE_GENERATION_KEY)
    except ValueError:
        cache.set(BUNDLE_GENERATION_KEY, 1, None)


class TranslationService:
    """
    Translation key store operations: bundle rendering, CRUD with version
    history, completeness reporting and JSON/CSV import/export.

    Every mutation runs in a transaction and appends a TranslationHistory
    snapshot. Errors are raised as ``core.exceptions.ServiceError`` subclasses.
    """

    # Read side

    def get_translations(self, language: str, namespace: Optional[str] = None) -> Dict[str, Any]:
        """
        Nested mapping of every key in scope for ``language``.

        With a namespace filter the namespace prefix is stripped from each
        key. Missing Nepali text falls back to English.
        """
        if language not in LANGUAGE_CODES:
            raise InvalidDataError('Language must be "en" or "ne"', language=language)
        namespace = (namespace or "").strip() or None

        cache_key = bundle_cache_key(language, namespace)
        tree = cache.get(cache_key)
        if tree is not None:
            return tree

        tree = {}
        rows = TranslationKey.objects.in_namespace(namespace).order_by('key').values_list('key', 'en', 'ne')
        for key, en, ne in rows:
            value = (ne or en) if language == "ne" else en
            if not value:
                continue
            set_nested_value(tree, strip_namespace(key, namespace), value)

        cache.set(cache_key, tree, get_int_config('translations_cache_timeout', 300))
        return tree

    def get_translation_keys(self, namespace=None, page=1, limit=None, search=None, is_required=None) -> Dict[str, Any]:
        limit = limit or get_int_config('translations_keys_page_size', 50)
        if page < 1 or limit < 1:
            raise InvalidDataError('Invalid pagination parameters', page=page, limit=limit)

        filterset = TranslationKeyFilter(
            data={'namespace': namespace or "", 'search': search or "", 'is_required': is_required},
            queryset=TranslationKey.objects.select_related('updated_by'),
        )
        if not filterset.is_valid():
            raise InvalidDataError('Invalid filter parameters', errors=filterset.errors)

        queryset = filterset.qs.order_by('key')
        total = queryset.count()
        offset = (page - 1) * limit
        return {
            'keys': list(queryset[offset:offset + limit]),
            'total': total,
            'page': page,
            'limit': limit,
            'total_pages': math.ceil(total / limit),
        }

    def validate_translation_completeness(self, namespace: Optional[str] = None) -> ValidationReport:
        rows = list(
            TranslationKey.objects.in_namespace(namespace)
            .order_by('key')
            .values_list('key', 'en', 'ne', 'is_required')
        )
        total = len(rows)
        complete = sum(1 for _key, en, ne, _required in rows if en and ne)
        completeness = (complete / total) * 100 if total else 100.0

        return ValidationReport(
            namespace=(namespace or "").strip() or 'all',
            completeness=round(completeness, 2),
            missing_keys=[key for key, _en, ne, _required in rows if not ne],
            total_keys=total,
            required_missing_keys=[key for key, _en, ne, required in rows if required and not ne],
        )

    def get_translation_history(self, key: str, limit: Optional[int] = None) -> List[TranslationHistory]:
        translation_key = self._lookup(key)
        limit = limit or get_int_config('translations_history_limit', 10)
        return list(TranslationHistory.objects.version_history(translation_key, limit))

    def get_recent_changes(self, namespace=None, limit=None) -> List[TranslationHistory]:
        limit = limit or get_int_config('translations_recent_changes_limit', 50)
        return list(TranslationHistory.objects.recent_changes(namespace, limit))

    def compare_versions(self, key: str, version1: int, version2: int) -> Dict[str, Any]:
        translation_key = self._lookup(key)
        snapshots = {
            entry.version: entry
            for entry in translation_key.history.filter(version__in=[version1, version2])
        }
        for version in (version1, version2):
            if version not in snapshots:
                raise NotFoundError(
                    f"Version {version} not found for translation key '{key}'",
                    key=key,
                    version=version,
                )

        older, newer = snapshots[version1], snapshots[version2]
        return {
            'changes': newer.compare_with(older),
            'version1': older,
            'version2': newer,
        }

    # Write side

    def create_translation(self, data: Dict[str, Any], user=None) -> TranslationKey:
        key = (data.get('key') or "").strip()
        if TranslationKey.objects.filter(key=key).exists():
            raise ConflictError(f"Translation key '{key}' already exists", key=key)

        translations = data.get('translations') or {}
        translation_key = TranslationKey(
            key=key,
            namespace=data.get('namespace') or "",
            en=translations.get('en') or "",
            ne=translations.get('ne') or "",
            context=data.get('context') or "",
            is_required=bool(data.get('is_required', False)),
            updated_by=user,
            last_updated=timezone.now(),
        )

        try:
            with transaction.atomic():
                self._save(translation_key)
                TranslationHistory.objects.record(
                    translation_key, ChangeType.CREATE, user, 'Initial creation'
                )
        except IntegrityError as exc:
            raise ConflictError(f"Translation key '{key}' already exists", key=key) from exc

        logger.info(f"Created translation key {key}")
        return translation_key

    def update_translation(self, key: str, translations: Dict[str, str], user=None) -> TranslationKey:
        """Set the provided non-empty ``en``/``ne`` texts on an existing key."""
        with transaction.atomic():
            translation_key = self._lookup(key, for_update=True)
            for language in LANGUAGE_CODES:
                if translations.get(language):
                    setattr(translation_key, language, translations[language])
            translation_key.updated_by = user or translation_key.updated_by
            translation_key.last_updated = timezone.now()
            self._save(translation_key)
            TranslationHistory.objects.record(
                translation_key, ChangeType.UPDATE, user, 'Translation updated'
            )
        return translation_key

    def update_translation_key(self, key: str, data: Dict[str, Any], user=None) -> TranslationKey:
        """
        Merge a partial update into an existing key.

        ``translations.en`` is applied when non-empty; ``translations.ne``,
        ``context`` and ``is_required`` whenever they are present, so an
        empty Nepali string clears the translation.
        """
        translations = data.get('translations') or {}

        with transaction.atomic():
            translation_key = self._lookup(key, for_update=True)

            if translations.get('en'):
                translation_key.en = translations['en']
            if translations.get('ne') is not None:
                translation_key.ne = translations['ne']
            if data.get('context') is not None:
                translation_key.context = data['context']
            if data.get('is_required') is not None:
                translation_key.is_required = data['is_required']

            translation_key.updated_by = user
            translation_key.last_updated = timezone.now()
            self._save(translation_key)
            TranslationHistory.objects.record(
                translation_key,
                ChangeType.UPDATE,
                user,
                data.get('change_reason') or 'Translation updated',
            )

        logger.info(f"Updated translation key {key}")
        return translation_key

    def delete_translation(self, key: str, user=None) -> None:
        with transaction.atomic():
            translation_key = self._lookup(key, for_update=True)
            TranslationHistory.objects.record(
                translation_key,
                ChangeType.DELETE,
                user or translation_key.updated_by,
                'Translation key deleted',
            )
            translation_key.delete()

        logger.info(f"Deleted translation key {key}")

    def rollback_translation(self, key: str, version: int, user=None, reason: Optional[str] = None) -> TranslationKey:
        """
        Restore the snapshot stored as ``version``.

        The rollback itself is recorded as a new UPDATE entry, so version
        numbers keep increasing.
        """
        with transaction.atomic():
            translation_key = self._lookup(key, for_update=True)
            snapshot = translation_key.history.filter(version=version).first()
            if snapshot is None:
                raise NotFoundError(
                    f"Version {version} not found for translation key '{key}'",
                    key=key,
                    version=version,
                )

            translation_key.en = snapshot.en
            translation_key.ne = snapshot.ne
            translation_key.context = snapshot.context
            translation_key.is_required = snapshot.is_required
            translation_key.updated_by = user
            translation_key.last_updated = timezone.now()
            self._save(translation_key)
            TranslationHistory.objects.record(
                translation_key,
                ChangeType.UPDATE,
                user,
                reason or f'Rolled back to version {version}',
            )

        logger.info(f"Rolled back translation key {key} to version {version}")
        return translation_key

    # Import / export

    def export_translations(self, export_format: str) -> bytes:
        rows = [
            {
                'key': translation_key.key,
                'namespace': translation_key.namespace,
                'en': translation_key.en,
                'ne': translation_key.ne,
                'context': translation_key.context,
                'isRequired': translation_key.is_required,
            }
            for translation_key in TranslationKey.objects.order_by('key')
        ]

        if export_format == 'json':
            payload = {'exportDate': timezone.now().isoformat(), 'translations': rows}
            return json.dumps(payload, ensure_ascii=False, indent=2).encode('utf-8')
        if export_format == 'csv':
            return rows_to_csv(rows).encode('utf-8')

        raise InvalidDataError(f"Unsupported export format: {export_format}", format=export_format)

    def import_translations(self, data, import_format: str, user=None) -> ImportResult:
        """
        Upsert every row of a JSON or CSV export.

        A failing row is reported in ``errors`` and the batch carries on;
        ``success`` is true only when no row failed.
        """
        result = ImportResult()

        if import_format not in EXPORT_FORMATS:
            result.errors.append(f"Unsupported import format: {import_format}")
            return result

        try:
            text = decode_upload(data)
        except UnicodeDecodeError as exc:
            result.errors.append(f"Import failed: {exc}")
            return result

        if import_format == 'json':
            self._import_json(text, result, user)
        else:
            self._import_csv(text, result, user)

        result.success = not result.errors
        logger.info(
            f"Imported translations ({import_format}): {result.created} created, "
            f"{result.updated} updated, {result.unchanged} unchanged, {len(result.errors)} errors"
        )
        return result

    def import_locale_tree(self, namespace, en_tree, ne_tree, user=None, is_required=None) -> ImportResult:
        """
        Upsert a namespace from nested per-language locale bundles.

        ``en_tree`` and ``ne_tree`` are the parsed ``<lang>/<namespace>.json``
        files of the frontend; their leaves become ``<namespace>.<path>`` keys.
        ``is_required`` is only written when given: existing keys otherwise
        keep their flag and new keys start optional.
        """
        result = ImportResult()
        en_flat = flatten_dict(en_tree)
        ne_flat = flatten_dict(ne_tree)

        for path in sorted(set(en_flat) | set(ne_flat)):
            en, ne = en_flat.get(path, ""), ne_flat.get(path, "")
            if not en and not ne:
                continue
            key = f"{namespace}.{path}"
            entry = {
                'key': key,
                'namespace': namespace,
                'en': en,
                'ne': ne,
                'context': f"Imported from locale files - {path}",
            }
            if is_required is not None:
                entry['isRequired'] = is_required
            self._import_entry(result, entry, user, f"Error importing {key}")

        result.success = not result.errors
        return result

    def get_system_user(self):
        username = get_config('translations_system_username', 'system')
        user, created = User.objects.get_or_create(
            **{User.USERNAME_FIELD: username},
            defaults={'is_active': False},
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])
        return user

    # Internals

    def _lookup(self, key, for_update=False) -> TranslationKey:
        queryset = TranslationKey.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        translation_key = queryset.filter(key=key).first()
        if translation_key is None:
            raise NotFoundError(f"Translation key '{key}' not found", key=key)
        return translation_key

    def _save(self, translation_key):
        try:
            translation_key.full_clean(validate_unique=False)
        except DjangoValidationError as exc:
            raise InvalidDataError.from_validation_error(exc) from exc
        translation_key.save()

    def _import_json(self, text, result, user):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            result.errors.append(f"Import failed: {exc}")
            return

        entries = payload.get('translations') if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            result.errors.append('Invalid JSON format: missing translations array')
            return

        for entry in entries:
            label = entry.get('key') if isinstance(entry, dict) else None
            self._import_entry(result, entry, user, f"Error importing {label}")

    def _import_csv(self, text, result, user):
        if not text.strip():
            result.errors.append('CSV file is empty')
            return

        unknown_columns = [name for name in csv_header(text) if name and name not in EXPORT_COLUMNS]
        if unknown_columns:
            result.warnings.append(f"Ignored unknown columns: {', '.join(unknown_columns)}")

        try:
            for line_number, row in iter_csv_rows(text):
                self._import_entry(result, row, user, f"Error importing line {line_number}")
        except csv.Error as exc:
            result.errors.append(f"Import failed: {exc}")

    def _import_entry(self, result, entry, user, label):
        try:
            with transaction.atomic():
                outcome = self._upsert(entry, user, result.warnings)
        except ServiceError as exc:
            result.errors.append(f"{label}: {exc.message}")
            logger.warning(f"{label}: {exc.message}")
            return
        except DatabaseError as exc:
            result.errors.append(f"{label}: {exc}")
            logger.warning(f"{label}: {exc}")
            return

        result.imported += 1
        setattr(result, outcome, getattr(result, outcome) + 1)

    def _upsert(self, entry, user, warnings):
        if not isinstance(entry, dict):
            raise InvalidDataError('Entry must be an object')

        key = str(entry.get('key') or "").strip()
        if not key:
            raise InvalidDataError('Translation key is required')

        nested = entry.get('translations') if isinstance(entry.get('translations'), dict) else {}
        values = {
            'en': str(entry.get('en', nested.get('en')) or "").strip(),
            'ne': str(entry.get('ne', nested.get('ne')) or "").strip(),
            'context': str(entry.get('context') or "").strip(),
        }
        namespace = str(entry.get('namespace') or "").strip()
        is_required = parse_bool(entry.get('isRequired', entry.get('is_required')))
        actor = user or self.get_system_user()

        existing = TranslationKey.objects.select_for_update().filter(key=key).first()
        if existing is None:
            translation_key = TranslationKey(
                key=key,
                namespace=namespace,
                is_required=bool(is_required),
                updated_by=actor,
                **values,
            )
            self._save(translation_key)
            TranslationHistory.objects.record(translation_key, ChangeType.CREATE, actor, 'Imported')
            return 'created'

        if namespace and namespace != existing.namespace:
            warnings.append(
                f"Namespace '{namespace}' ignored for key '{key}' (stays in '{existing.namespace}')"
            )

        changes = {name: value for name, value in values.items() if value and value != getattr(existing, name)}
        if is_required is not None and is_required != existing.is_required:
            changes['is_required'] = is_required
        if not changes:
            return 'unchanged'

        for name, value in changes.items():
            setattr(existing, name, value)
        existing.updated_by = actor
        existing.last_updated = timezone.now()
        self._save(existing)
        TranslationHistory.objects.record(existing, ChangeType.UPDATE, actor, 'Imported')
        return 'updated'
