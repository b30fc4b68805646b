# taste/services/acquisition.py
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, Optional, Tuple
from urllib.parse import urlparse

from botocore.exceptions import BotoCoreError, ClientError

from taste.services.concurrency import bounded_map
from taste.services.context import PHOTOS_PREFIX, TRAIN_PREFIX, TasteContext
from taste.services.indexing import index_faces_from_images

logger = logging.getLogger(__name__)


def training_keys(ctx: TasteContext, url: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    /<bucket>/photos/<channel>/<archivo>  ->  (photos/<channel>/<archivo>, train/<channel>/<archivo>)
    None si la URL no apunta a una foto de nuestro bucket.
    """
    if not url:
        return None
    path = urlparse(url).path
    photos_path = f"/{ctx.bucket}/{PHOTOS_PREFIX}/"
    if not path.startswith(photos_path):
        return None

    rest = path[len(photos_path):]
    if not rest:
        return None
    return f"{PHOTOS_PREFIX}/{rest}", f"{TRAIN_PREFIX}/{rest}"


def copy_to_training(ctx: TasteContext, photo: Dict[str, Any]) -> Optional[str]:
    keys = training_keys(ctx, photo.get("url"))
    if not keys:
        logger.debug("Skipping photo with unexpected url %s", photo.get("url"))
        return None

    src_key, dst_key = keys
    try:
        ctx.object_store.copy_object(ctx.bucket, src_key, dst_key)
    except (ClientError, BotoCoreError) as e:
        logger.warning("Unable to copy %s to %s: %s", src_key, dst_key, e)
        return None
    return dst_key


def acquire_taste(ctx: TasteContext, photos: Iterable[Dict[str, Any]]) -> int:
    """Pasa fotos que gustaron a train/ y las indexa. Devuelve caras indexadas."""
    copied = bounded_map(lambda photo: copy_to_training(ctx, photo), photos, ctx.concurrency)
    images = [key for key in copied if key]

    indexed = index_faces_from_images(ctx, images)
    logger.debug("Indexed %d face(s)", indexed)
    return indexed
