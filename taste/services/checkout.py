# taste/services/checkout.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError
from django.utils import timezone
from requests import RequestException

from taste.services.clients import FaceErrorKind, FaceRecognitionError
from taste.services.concurrency import bounded_map
from taste.services.context import TasteContext
from taste.services.errors import InvalidArgumentsError, PhotoDownloadError
from taste.services.photos import PhotoPatch, SavedPhoto, save_photo

logger = logging.getLogger(__name__)


@dataclass
class CheckOutResult:
    face_similarities: List[Optional[float]] = field(default_factory=list)
    face_similarity_max: Optional[float] = None
    face_similarity_min: Optional[float] = None
    face_similarity_mean: float = 0
    like: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "faceSimilarities": self.face_similarities,
            "faceSimilarityMax": self.face_similarity_max,
            "faceSimilarityMin": self.face_similarity_min,
            "faceSimilarityMean": self.face_similarity_mean,
            "like": self.like,
        }


def round_half_up(value: float, places: int = 2) -> float:
    """Redondeo a `places` decimales con las mitades hacia arriba (84.005 -> 84.01)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def is_checked_out(photo: Dict[str, Any]) -> bool:
    return bool(photo.get("similarity_date"))


def compare_faces_from_image(ctx: TasteContext, saved: SavedPhoto) -> PhotoPatch:
    """Mejor similitud contra el collection; imagen inválida cuenta como 0."""
    try:
        similarities = ctx.faces.search_faces_by_image(ctx.collection, ctx.bucket, saved.key)
        similarity = round_half_up(max(similarities)) if similarities else 0
    except FaceRecognitionError as e:
        if e.kind is not FaceErrorKind.INVALID_IMAGE:
            raise
        similarity = 0

    return PhotoPatch(
        url=saved.url,
        similarity=similarity,
        similarity_date=timezone.now().isoformat(),
    )


def check_photo_out(ctx: TasteContext, channel: str, photo: Dict[str, Any]) -> Tuple[Optional[float], PhotoPatch]:
    """
    Similitud de una foto contra el collection + patch a aplicar.
    Las fotos ya comparadas (similarity_date) no tocan S3 ni Rekognition.
    """
    if is_checked_out(photo):
        return photo.get("similarity"), PhotoPatch()

    saved = None
    try:
        saved = save_photo(ctx, channel, photo)
        patch = compare_faces_from_image(ctx, saved)
        return patch.similarity, patch
    except (PhotoDownloadError, InvalidArgumentsError, FaceRecognitionError,
            ClientError, BotoCoreError, RequestException) as e:
        logger.warning("Unable to check out photo %s: %s", photo.get("url"), e)
        # la foto ya está en S3 aunque la comparación haya fallado
        return None, PhotoPatch(url=saved.url if saved else None)


def summarize(face_similarities: List[Optional[float]], threshold: float) -> CheckOutResult:
    valid = [s for s in face_similarities if s is not None]
    scored = [s for s in valid if s]
    mean = round_half_up(sum(scored) / len(scored)) if scored else 0

    return CheckOutResult(
        face_similarities=face_similarities,
        face_similarity_max=max(valid) if valid else None,
        face_similarity_min=min(valid) if valid else None,
        face_similarity_mean=mean,
        like=bool(scored) and mean > threshold,
    )


def check_photos_out(ctx: TasteContext, channel: str, photos: List[Dict[str, Any]], threshold: float) -> CheckOutResult:
    """
    Compara un lote de fotos (concurrencia acotada) y decide el like.
    Efecto secundario: cada foto recibe url/similarity/similarity_date.
    """
    if not channel or photos is None:
        raise InvalidArgumentsError()

    results = bounded_map(lambda photo: check_photo_out(ctx, channel, photo), photos, ctx.concurrency)

    for photo, (_, patch) in zip(photos, results):
        patch.apply(photo)

    return summarize([similarity for similarity, _ in results], threshold)
