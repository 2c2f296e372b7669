import django_filters
from django.db.models import Q

from .models import TranslationKey


class TranslationKeyFilter(django_filters.FilterSet):
    namespace = django_filters.CharFilter(method='filter_namespace')
    search = django_filters.CharFilter(method='filter_search')
    is_required = django_filters.BooleanFilter()

    class Meta:
        model = TranslationKey
        fields = ['namespace', 'search', 'is_required']

    def filter_namespace(self, queryset, name, value):
        return queryset.in_namespace(value)

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(key__icontains=value)
            | Q(en__icontains=value)
            | Q(ne__icontains=value)
            | Q(context__icontains=value)
        )
