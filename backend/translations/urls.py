from django.urls import path

from content.views import ContentCreateView, ContentDetailView, ContentSearchView

from .views import (
    RecentChangesView,
    TranslationBundleView,
    TranslationCompareView,
    TranslationExportView,
    TranslationHistoryView,
    TranslationImportView,
    TranslationKeyDetailView,
    TranslationKeyListView,
    TranslationRollbackView,
    TranslationValidateView,
)

urlpatterns = [
    path("", TranslationBundleView.as_view(), name="translation-bundle"),
    path("keys/", TranslationKeyListView.as_view(), name="translation-keys"),
    path("validate/", TranslationValidateView.as_view(), name="translation-validate"),
    path("export/", TranslationExportView.as_view(), name="translation-export"),
    path("import/", TranslationImportView.as_view(), name="translation-import"),
    path("changes/recent/", RecentChangesView.as_view(), name="translation-recent-changes"),
    path("content/", ContentCreateView.as_view(), name="content-create"),
    path("content/search/", ContentSearchView.as_view(), name="content-search"),
    path(
        "content/<str:content_type>/<str:content_id>/",
        ContentDetailView.as_view(),
        name="content-detail",
    ),
    path("content/<str:content_id>/", ContentDetailView.as_view(), name="content-update"),
    path("<str:key>/history/", TranslationHistoryView.as_view(), name="translation-history"),
    path("<str:key>/rollback/", TranslationRollbackView.as_view(), name="translation-rollback"),
    path("<str:key>/compare/", TranslationCompareView.as_view(), name="translation-compare"),
    path("<str:key>/", TranslationKeyDetailView.as_view(), name="translation-key-detail"),
]
