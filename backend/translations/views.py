from dataclasses import asdict
from pathlib import Path

from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from configuration.utils import get_int_config
from core.exceptions import error_response

from .serializers import (
    CompareQuerySerializer,
    ExportQuerySerializer,
    ImportResultSerializer,
    ImportSerializer,
    LanguageQuerySerializer,
    LimitQuerySerializer,
    NamespaceQuerySerializer,
    RollbackSerializer,
    TranslationHistorySerializer,
    TranslationKeyCreateSerializer,
    TranslationKeySerializer,
    TranslationKeysQuerySerializer,
    TranslationKeyUpdateSerializer,
    ValidationReportSerializer,
)
from .services import TranslationService

EXPORT_CONTENT_TYPES = {
    "json": "application/json",
    "csv": "text/csv; charset=utf-8",
}


def validated_query(serializer_class, request):
    serializer = serializer_class(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class TranslationServiceMixin:
    """Resolves the service used by a view; tests swap ``service_class``."""

    service_class = TranslationService

    def get_service(self):
        return self.service_class()


class TranslationBundleView(TranslationServiceMixin, APIView):
    """
    Public translation bundle read and authenticated key creation.
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        summary="Get translation bundle",
        description="Nested key/value tree for one language, optionally limited to a namespace.",
        parameters=[LanguageQuerySerializer],
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        params = validated_query(LanguageQuerySerializer, request)
        tree = self.get_service().get_translations(params["language"], params.get("namespace"))
        return Response({"success": True, "data": tree})

    @extend_schema(
        summary="Create translation key",
        request=TranslationKeyCreateSerializer,
        responses={201: TranslationKeySerializer},
    )
    def post(self, request):
        serializer = TranslationKeyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        translation_key = self.get_service().create_translation(serializer.validated_data, request.user)
        return Response(
            {"success": True, "data": TranslationKeySerializer(translation_key).data},
            status=status.HTTP_201_CREATED,
        )


class TranslationKeyDetailView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Update translation key",
        request=TranslationKeyUpdateSerializer,
        responses={200: TranslationKeySerializer},
    )
    def put(self, request, key):
        serializer = TranslationKeyUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        translation_key = self.get_service().update_translation_key(key, serializer.validated_data, request.user)
        return Response({"success": True, "data": TranslationKeySerializer(translation_key).data})

    @extend_schema(
        summary="Partially update translation key",
        request=TranslationKeyUpdateSerializer,
        responses={200: TranslationKeySerializer},
    )
    def patch(self, request, key):
        return self.put(request, key)

    @extend_schema(summary="Delete translation key", responses={200: OpenApiTypes.OBJECT})
    def delete(self, request, key):
        self.get_service().delete_translation(key, request.user)
        return Response({"success": True, "message": "Translation key deleted successfully"})


class TranslationKeyListView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List translation keys",
        parameters=[TranslationKeysQuerySerializer],
        responses={200: TranslationKeySerializer(many=True)},
    )
    def get(self, request):
        params = validated_query(TranslationKeysQuerySerializer, request)
        page = self.get_service().get_translation_keys(
            namespace=params.get("namespace"),
            page=params["page"],
            limit=params.get("limit"),
            search=params.get("search"),
            is_required=params.get("is_required"),
        )
        page["keys"] = TranslationKeySerializer(page["keys"], many=True).data
        return Response({"success": True, "data": page})


class TranslationValidateView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Translation completeness report",
        parameters=[NamespaceQuerySerializer],
        responses={200: ValidationReportSerializer},
    )
    def get(self, request):
        params = validated_query(NamespaceQuerySerializer, request)
        report = self.get_service().validate_translation_completeness(params.get("namespace"))
        return Response({"success": True, "data": ValidationReportSerializer(asdict(report)).data})


class TranslationExportView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Export translations",
        description="Downloads every translation key as a JSON or CSV attachment.",
        parameters=[ExportQuerySerializer],
        responses={200: OpenApiTypes.BINARY},
    )
    def get(self, request):
        export_format = validated_query(ExportQuerySerializer, request)["format"]
        payload = self.get_service().export_translations(export_format)

        filename = f"translations_{timezone.now():%Y-%m-%d}.{export_format}"
        response = HttpResponse(payload, content_type=EXPORT_CONTENT_TYPES[export_format])
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        return response


class TranslationImportView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        summary="Import translations",
        description="Upserts keys from a JSON or CSV export. Row failures are reported, not fatal.",
        request={"multipart/form-data": ImportSerializer},
        responses={200: ImportResultSerializer},
    )
    def post(self, request):
        serializer = ImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data["file"]

        extension = Path(upload.name or "").suffix.lower().lstrip(".")
        if extension not in ("json", "csv"):
            return error_response("Only JSON and CSV files are allowed", status.HTTP_400_BAD_REQUEST)

        max_size = get_int_config("translations_import_max_size", 10 * 1024 * 1024)
        if upload.size > max_size:
            return error_response(
                "File too large",
                status.HTTP_400_BAD_REQUEST,
                {"max_size": max_size, "size": upload.size},
            )

        import_format = serializer.validated_data.get("format") or extension
        result = self.get_service().import_translations(upload.read(), import_format, request.user)
        return Response({"success": result.success, "data": ImportResultSerializer(asdict(result)).data})


class TranslationHistoryView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Translation key history",
        parameters=[OpenApiParameter("limit", OpenApiTypes.INT, description="1-100, default 10")],
        responses={200: TranslationHistorySerializer(many=True)},
    )
    def get(self, request, key):
        params = validated_query(LimitQuerySerializer, request)
        history = self.get_service().get_translation_history(key, params.get("limit"))
        return Response({"success": True, "data": TranslationHistorySerializer(history, many=True).data})


class RecentChangesView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Recent translation changes",
        parameters=[LimitQuerySerializer],
        responses={200: TranslationHistorySerializer(many=True)},
    )
    def get(self, request):
        params = validated_query(LimitQuerySerializer, request)
        changes = self.get_service().get_recent_changes(params.get("namespace"), params.get("limit"))
        return Response({"success": True, "data": TranslationHistorySerializer(changes, many=True).data})


class TranslationRollbackView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Roll back a translation key",
        description="Restores a previous version; the rollback is recorded as a new version.",
        request=RollbackSerializer,
        responses={200: TranslationKeySerializer},
    )
    def post(self, request, key):
        serializer = RollbackSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        translation_key = self.get_service().rollback_translation(
            key,
            serializer.validated_data["version"],
            request.user,
            serializer.validated_data.get("reason"),
        )
        return Response({"success": True, "data": TranslationKeySerializer(translation_key).data})


class TranslationCompareView(TranslationServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Compare two versions of a translation key",
        parameters=[CompareQuerySerializer],
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request, key):
        params = validated_query(CompareQuerySerializer, request)
        comparison = self.get_service().compare_versions(key, params["version1"], params["version2"])
        return Response({
            "success": True,
            "data": {
                "changes": comparison["changes"],
                "version1": TranslationHistorySerializer(comparison["version1"]).data,
                "version2": TranslationHistorySerializer(comparison["version2"]).data,
            },
        })
