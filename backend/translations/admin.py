from django.contrib import admin, messages
from django.db import transaction
from django.utils import timezone
from unfold.admin import ModelAdmin, TabularInline
from unfold.decorators import action, display

from .models import ChangeType, TranslationHistory, TranslationKey


class TranslationHistoryInline(TabularInline):
    model = TranslationHistory
    fk_name = 'translation_key'
    extra = 0
    can_delete = False
    ordering = ['-version']
    fields = ['version', 'change_type', 'en', 'ne', 'changed_by', 'change_reason', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(TranslationKey)
class TranslationKeyAdmin(ModelAdmin):
    list_display = ['key', 'namespace', 'en_preview', 'has_nepali', 'is_required', 'current_version', 'last_updated']
    list_filter = ['namespace', 'is_required']
    search_fields = ['key', 'en', 'ne', 'context']
    readonly_fields = ['current_version', 'last_updated', 'updated_by', 'created_at', 'updated_at']
    actions = ['mark_required', 'mark_optional']
    inlines = [TranslationHistoryInline]

    fieldsets = (
        (None, {'fields': ('key', 'namespace', 'is_required')}),
        ('Translations', {'fields': ('en', 'ne', 'context')}),
        ('Tracking', {'fields': ('current_version', 'last_updated', 'updated_by', 'created_at', 'updated_at')}),
    )

    @display(description="English")
    def en_preview(self, obj):
        return obj.en[:80] + "..." if len(obj.en) > 80 else obj.en

    @display(description="Nepali", boolean=True)
    def has_nepali(self, obj):
        return obj.has_translation('ne')

    def save_model(self, request, obj, form, change):
        if change and not form.has_changed():
            return
        obj.updated_by = request.user
        obj.last_updated = timezone.now()
        with transaction.atomic():
            super().save_model(request, obj, form, change)
            TranslationHistory.objects.record(
                obj,
                ChangeType.UPDATE if change else ChangeType.CREATE,
                request.user,
                'Edited in admin' if change else 'Created in admin',
            )

    def delete_model(self, request, obj):
        with transaction.atomic():
            TranslationHistory.objects.record(obj, ChangeType.DELETE, request.user, 'Deleted in admin')
            super().delete_model(request, obj)

    def delete_queryset(self, request, queryset):
        for obj in queryset:
            self.delete_model(request, obj)

    def _set_required(self, request, queryset, required):
        changed = 0
        for translation_key in queryset.filter(is_required=not required):
            with transaction.atomic():
                if required:
                    translation_key.mark_as_required()
                else:
                    translation_key.mark_as_optional()
                translation_key.updated_by = request.user
                translation_key.save()
                TranslationHistory.objects.record(
                    translation_key, ChangeType.UPDATE, request.user, 'Required status changed in admin'
                )
            changed += 1
        return changed

    @action(description="Mark selected keys as required")
    def mark_required(self, request, queryset):
        changed = self._set_required(request, queryset, True)
        messages.success(request, f"Marked {changed} translation key(s) as required.")

    @action(description="Mark selected keys as optional")
    def mark_optional(self, request, queryset):
        changed = self._set_required(request, queryset, False)
        messages.success(request, f"Marked {changed} translation key(s) as optional.")


@admin.register(TranslationHistory)
class TranslationHistoryAdmin(ModelAdmin):
    list_display = ['key', 'version', 'change_type', 'changed_by', 'change_reason', 'created_at']
    list_filter = ['change_type', 'namespace']
    search_fields = ['key', 'en', 'ne', 'change_reason']
    readonly_fields = [field.name for field in TranslationHistory._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
