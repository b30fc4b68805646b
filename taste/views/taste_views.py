# taste/views/taste_views.py
from botocore.exceptions import BotoCoreError, ClientError

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.parsers import JSONParser
from rest_framework import status, permissions

from taste.apps import get_taste
from taste.serializers import (
    AcquireTasteSerializer, CheckOutSerializer, SnapshotSerializer,
    TasteSettingsSerializer,
)
from taste.services.clients import FaceRecognitionError
from taste.services.errors import InvalidArgumentsError, PhotoDownloadError, PhotoFormatError


def _aws_error(e):
    if isinstance(e, ClientError):
        msg = e.response.get("Error", {}).get("Message", str(e))
    else:
        msg = str(e)
    return Response({"ok": False, "detail": f"AWS error: {msg}"}, status=status.HTTP_400_BAD_REQUEST)


class CheckPhotosOutView(APIView):
    """
    POST /api/taste/photos/check-out/
    Body: { channel, photos: [{url, similarity?, similarity_date?}] }
    Respuesta: estadísticas de similitud + like + fotos actualizadas
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        ser = CheckOutSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        photos = [dict(p) for p in ser.validated_data["photos"]]

        try:
            result = get_taste().check_photos_out(ser.validated_data["channel"], photos)
        except InvalidArgumentsError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (ClientError, BotoCoreError, FaceRecognitionError) as e:
            return _aws_error(e)

        return Response({**result.as_dict(), "photos": photos}, status=status.HTTP_200_OK)


class MentalSnapshotView(APIView):
    """
    POST /api/taste/photos/snapshot/
    Body: { channel, photo: {url} }
    Respuesta: { url } del thumbnail 84x84
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        ser = SnapshotSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            url = get_taste().mental_snapshot(ser.validated_data["channel"], dict(ser.validated_data["photo"]))
        except InvalidArgumentsError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (PhotoDownloadError, PhotoFormatError) as e:
            return Response({"detail": str(e)}, status=status.HTTP_502_BAD_GATEWAY)
        except (ClientError, BotoCoreError, FaceRecognitionError) as e:
            return _aws_error(e)

        return Response({"url": url}, status=status.HTTP_201_CREATED)


class AcquireTasteView(APIView):
    """
    POST /api/taste/acquire/
    Body: { photos: [{url}] }  (fotos ya guardadas en photos/<channel>/)
    Respuesta: { indexed_faces }
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [JSONParser]

    def post(self, request):
        ser = AcquireTasteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            indexed = get_taste().acquire_taste([dict(p) for p in ser.validated_data["photos"]])
        except (ClientError, BotoCoreError, FaceRecognitionError) as e:
            return _aws_error(e)

        return Response({"indexed_faces": indexed}, status=status.HTTP_200_OK)


class SyncView(APIView):
    """POST /api/taste/sync/ -> sincroniza train/ con el collection de Rekognition."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        try:
            report = get_taste().sync()
        except (ClientError, BotoCoreError, FaceRecognitionError) as e:
            return _aws_error(e)

        if report is None:
            return Response({"detail": "sync en curso"}, status=status.HTTP_409_CONFLICT)

        return Response({
            "deleted": report.deleted,
            "indexed": report.indexed,
            "total": report.total,
            "duration": report.duration,
        }, status=status.HTTP_200_OK)


class TasteSettingsView(APIView):
    """GET/PATCH /api/taste/settings/"""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        settings = get_taste().find_or_create_settings()
        return Response(TasteSettingsSerializer(settings).data)

    def patch(self, request):
        settings = get_taste().find_or_create_settings()
        ser = TasteSettingsSerializer(settings, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(ser.data)
