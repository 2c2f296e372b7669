from django.contrib import admin, messages
from unfold.admin import ModelAdmin
from unfold.decorators import action, display

from .models import Configuration


@admin.register(Configuration)
class ConfigurationAdmin(ModelAdmin):
    list_display = ['key', 'value_preview', 'description', 'is_modified_indicator', 'updated_at']
    list_filter = ['is_default']
    search_fields = ['key', 'value', 'description']
    readonly_fields = ['created_at', 'updated_at', 'is_default']
    actions = ['reset_selected_to_default']

    def has_delete_permission(self, request, obj=None):
        return False

    @display(description="Value")
    def value_preview(self, obj):
        return obj.value[:100] + "..." if len(obj.value) > 100 else obj.value

    @display(description="Modified", boolean=True)
    def is_modified_indicator(self, obj):
        return obj.is_modified_from_default()

    @action(description="Reset selected configurations to default values")
    def reset_selected_to_default(self, request, queryset):
        reset = [config.key for config in queryset if Configuration.reset_to_default(config.key)]
        skipped = queryset.count() - len(reset)

        if reset:
            messages.success(request, f"Reset {len(reset)} configuration(s) to default values.")
        if skipped:
            messages.warning(request, f"{skipped} configuration(s) have no default value defined.")
