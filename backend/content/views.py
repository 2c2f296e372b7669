from drf_spectacular.utils import OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import InvalidDataError

from .localizer import ContentLocalizer, ContentRef
from .serializers import (
    ContentCreateSerializer,
    ContentSearchQuerySerializer,
    ContentUpdateSerializer,
    LocalizedContentQuerySerializer,
)


class ContentLocalizerMixin:
    localizer_class = ContentLocalizer

    def get_localizer(self):
        return self.localizer_class()


class ContentCreateView(ContentLocalizerMixin, APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Create multilingual content",
        description="Creates a product, news item, gallery item or mayor message from the generic bilingual shape.",
        request=ContentCreateSerializer,
        responses={201: OpenApiTypes.OBJECT},
    )
    def post(self, request):
        serializer = ContentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        document = self.get_localizer().create_multilingual_content(serializer.validated_data, request.user)
        return Response({"success": True, "data": document}, status=status.HTTP_201_CREATED)


class ContentDetailView(ContentLocalizerMixin, APIView):
    """
    Localized read (public) and update (authenticated) of one document.

    Served on ``content/<type>/<id>/`` and, for updates only, on
    ``content/<id>/`` where the type comes from ``metadata.type``.
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        summary="Get localized content",
        parameters=[LocalizedContentQuerySerializer],
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request, content_id, content_type=None):
        if content_type is None:
            raise InvalidDataError("Content type and ID are required")
        serializer = LocalizedContentQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        ref = ContentRef.parse(content_type, content_id)
        content = self.get_localizer().get_localized_content(ref, serializer.validated_data["language"])
        return Response({"success": True, "data": content})

    @extend_schema(
        summary="Update multilingual content",
        request=ContentUpdateSerializer,
        responses={200: OpenApiTypes.OBJECT},
    )
    def put(self, request, content_id, content_type=None):
        serializer = ContentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        content_type = content_type or (data.get("metadata") or {}).get("type")
        if not content_type:
            raise InvalidDataError("Content type is required (metadata.type)")

        ref = ContentRef.parse(content_type, content_id)
        document = self.get_localizer().update_multilingual_content(ref, data)
        return Response({"success": True, "data": document})


class ContentSearchView(ContentLocalizerMixin, APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Search multilingual content",
        parameters=[ContentSearchQuerySerializer],
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        serializer = ContentSearchQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        results = self.get_localizer().search_multilingual_content(**serializer.validated_data)
        return Response({"success": True, "data": results, "count": len(results)})
