# taste/services/sync.py
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Dict, List

from taste.services.clients import FaceRecognitionError
from taste.services.context import TRAIN_PREFIX, TasteContext
from taste.services.indexing import index_faces_from_images

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncReport:
    deleted: int
    indexed: int
    total: int
    duration: float


def plan_sync(faces: List[Dict[str, str]], training_images: List[str]):
    """
    Diferencias entre lo indexado y lo que hay en train/.
    Devuelve (face_ids_a_borrar, imagenes_a_indexar).
    """
    current_images = {f["ExternalImageId"] for f in faces}
    available_images = set(training_images)

    images_to_delete = current_images - available_images
    images_to_index = sorted(available_images - current_images)

    faces_to_delete = [f["FaceId"] for f in faces if f["ExternalImageId"] in images_to_delete]
    return faces_to_delete, images_to_index


def delete_faces(ctx: TasteContext, face_ids: List[str]) -> int:
    if not face_ids:
        return 0
    try:
        ctx.faces.delete_faces(ctx.collection, face_ids)
        return len(face_ids)
    except FaceRecognitionError as e:
        logger.warning("Unable to delete %d face(s): %s", len(face_ids), e)
        return 0


def sync_bucket_and_collection(ctx: TasteContext) -> SyncReport:
    """
    Deja el collection de Rekognition igual a las imágenes bajo train/:
    borra caras de imágenes que ya no están e indexa las nuevas.
    """
    start = time.monotonic()

    faces = ctx.faces.list_faces(ctx.collection)
    training_images = ctx.object_store.list_objects(ctx.bucket, TRAIN_PREFIX)

    faces_to_delete, images_to_index = plan_sync(faces, training_images)

    deleted = delete_faces(ctx, faces_to_delete)
    indexed = index_faces_from_images(ctx, images_to_index)

    report = SyncReport(
        deleted=deleted,
        indexed=indexed,
        total=len(faces) - deleted + indexed,
        duration=round(time.monotonic() - start, 2),
    )
    logger.debug(
        "Synced reference face collection: %d faces available (time = %ss, deleted = %d, indexed = %d)",
        report.total, report.duration, report.deleted, report.indexed,
    )
    return report
