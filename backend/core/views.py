from datetime import timedelta

from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from content.localizer import CONTENT_MODELS
from translations.models import ChangeType, TranslationHistory
from translations.services import TranslationService


def dashboard_callback(request, context):
    now = timezone.now()
    last_week = now - timedelta(days=7)
    prev_week = last_week - timedelta(days=7)

    report = TranslationService().validate_translation_completeness()
    required_missing = len(report.required_missing_keys)

    changes_this_week = TranslationHistory.objects.filter(created_at__gte=last_week).count()
    changes_prev_week = TranslationHistory.objects.filter(
        created_at__gte=prev_week, created_at__lt=last_week
    ).count()
    keys_this_week = TranslationHistory.objects.filter(
        change_type=ChangeType.CREATE, created_at__gte=last_week
    ).count()
    keys_prev_week = TranslationHistory.objects.filter(
        change_type=ChangeType.CREATE, created_at__gte=prev_week, created_at__lt=last_week
    ).count()

    def calculate_growth(current, previous):
        if previous == 0:
            return "+100%" if current > 0 else "0%"
        growth = ((current - previous) / previous) * 100
        return f"+{growth:.1f}%" if growth >= 0 else f"{growth:.1f}%"

    context['kpi'] = [
        {
            'title': _('Translation Keys'),
            'metric': f"{report.total_keys:,}",
            'footer': f"{len(report.missing_keys)} keys without Nepali text",
            'link': '/admin/translations/translationkey/',
        },
        {
            'title': _('Completeness'),
            'metric': f"{report.completeness:.1f}%",
            'footer': f"{required_missing} required keys missing Nepali",
        },
    ]
    for model in CONTENT_MODELS.values():
        total = model.objects.count()
        context['kpi'].append({
            'title': str(model._meta.verbose_name_plural).title(),
            'metric': f"{total:,}",
            'footer': f"{model.objects.filter(is_active=True).count()} of {total} active",
            'link': f"/admin/content/{model._meta.model_name}/",
        })

    context['weekly_metrics'] = [
        {
            'title': _('Translation Changes This Week'),
            'metric': changes_this_week,
            'growth': calculate_growth(changes_this_week, changes_prev_week),
            'description': _('History entries recorded this week'),
        },
        {
            'title': _('New Keys This Week'),
            'metric': keys_this_week,
            'growth': calculate_growth(keys_this_week, keys_prev_week),
            'description': _('Translation keys created this week'),
        },
    ]

    context['recent_activity'] = {
        'total_keys': report.total_keys,
        'missing_nepali': len(report.missing_keys),
        'required_missing': required_missing,
        'recent_changes': list(TranslationHistory.objects.recent_changes(limit=5)),
        'last_updated': now.strftime('%Y-%m-%d %H:%M'),
    }

    return context
