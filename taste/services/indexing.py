# taste/services/indexing.py
from __future__ import annotations
import logging
from typing import Iterable

from botocore.exceptions import BotoCoreError, ClientError

from taste.services.clients import FaceErrorKind, FaceRecognitionError
from taste.services.concurrency import bounded_map
from taste.services.context import TasteContext

logger = logging.getLogger(__name__)


def index_faces_from_image(ctx: TasteContext, key: str) -> bool:
    """
    Indexa una imagen de entrenamiento. Devuelve True solo si quedó exactamente
    una cara indexada; con 0 o varias caras la imagen se purga del collection
    y del bucket.
    """
    try:
        face_ids = ctx.faces.index_faces(ctx.collection, ctx.bucket, key)

        if len(face_ids) != 1:
            if face_ids:
                ctx.faces.delete_faces(ctx.collection, face_ids)
            ctx.object_store.delete_object(ctx.bucket, key)
            logger.debug("Purged %s (%d faces detected)", key, len(face_ids))
            return False

        return True

    except FaceRecognitionError as e:
        if e.kind is FaceErrorKind.INVALID_IMAGE:
            try:
                ctx.object_store.delete_object(ctx.bucket, key)
            except (ClientError, BotoCoreError) as delete_error:
                logger.warning("Unable to delete unusable image %s: %s", key, delete_error)
            return False
        logger.warning("Unable to index %s: %s", key, e)
        return False
    except (ClientError, BotoCoreError) as e:
        logger.warning("Unable to index %s: %s", key, e)
        return False


def index_faces_from_images(ctx: TasteContext, keys: Iterable[str]) -> int:
    """Cuántas imágenes quedaron con exactamente una cara indexada."""
    results = bounded_map(lambda key: index_faces_from_image(ctx, key), keys, ctx.concurrency)
    return sum(1 for ok in results if ok)
