from django.db import models, transaction
from django.db.models import Count, F, Q


class TranslationKeyQuerySet(models.QuerySet):
    """Custom QuerySet for TranslationKey model"""

    def in_namespace(self, namespace=None):
        if namespace and namespace.strip():
            return self.filter(namespace=namespace.strip())
        return self

    def missing_nepali(self):
        return self.filter(ne="")

    def missing_translations(self, namespace=None):
        return self.in_namespace(namespace).missing_nepali().order_by('namespace', 'key')

    def namespace_completeness(self, namespace):
        totals = self.filter(namespace=namespace).aggregate(
            total=Count('id'),
            with_nepali=Count('id', filter=~Q(ne="")),
        )
        total = totals['total']
        completeness = (totals['with_nepali'] / total) * 100 if total else 0
        return {
            'total': total,
            'with_nepali': totals['with_nepali'],
            'completeness': completeness,
        }


class TranslationHistoryManager(models.Manager):
    """Custom Manager for TranslationHistory model"""

    def version_history(self, translation_key, limit=10):
        return self.filter(translation_key=translation_key).select_related('changed_by').order_by('-version')[:limit]

    def recent_changes(self, namespace=None, limit=50):
        queryset = self.select_related('changed_by')
        if namespace and namespace.strip():
            queryset = queryset.filter(namespace=namespace.strip())
        return queryset.order_by('-created_at', '-id')[:limit]

    def record(self, translation_key, change_type, changed_by=None, change_reason=""):
        """
        Append a snapshot of ``translation_key`` with the next version number.

        The counter lives on the key row and is bumped with a single UPDATE,
        so concurrent writers on the same key are serialised by the row lock
        instead of racing on "max(version) + 1".
        """
        key_model = type(translation_key)
        with transaction.atomic():
            key_model.objects.filter(pk=translation_key.pk).update(
                current_version=F('current_version') + 1
            )
            translation_key.current_version = key_model.objects.values_list(
                'current_version', flat=True
            ).get(pk=translation_key.pk)

            return self.create(
                translation_key=translation_key,
                key=translation_key.key,
                namespace=translation_key.namespace,
                version=translation_key.current_version,
                en=translation_key.en,
                ne=translation_key.ne,
                context=translation_key.context,
                is_required=translation_key.is_required,
                change_type=change_type,
                changed_by=changed_by,
                change_reason=change_reason or "",
            )
