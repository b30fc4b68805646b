# taste/services/provisioning.py
from __future__ import annotations
import logging
import random
import time
from typing import Iterable, Optional

from taste.services.context import TasteContext

logger = logging.getLogger(__name__)


def resolve_resource_name(configured: Optional[str], existing: Iterable[str], prefix: str) -> str:
    """Nombre configurado > primero existente con el prefijo > nombre nuevo con timestamp."""
    if configured:
        return configured
    for name in existing:
        if name.startswith(prefix):
            return name
    return f"{prefix}{int(time.time() * 1000)}-{random.randint(0, 9)}"


def ensure_collection(ctx: TasteContext) -> str:
    collection_ids = ctx.faces.list_collections()
    ctx.collection = resolve_resource_name(ctx.collection, collection_ids, ctx.resource_prefix)

    if ctx.collection not in collection_ids:
        logger.debug("Creating AWS Rekognition collection %s", ctx.collection)
        ctx.faces.create_collection(ctx.collection)
    return ctx.collection


def ensure_bucket(ctx: TasteContext) -> str:
    buckets = ctx.object_store.list_buckets()
    ctx.bucket = resolve_resource_name(ctx.bucket, buckets, ctx.resource_prefix)

    if ctx.bucket not in buckets:
        logger.debug("Creating AWS S3 bucket %s", ctx.bucket)
        ctx.object_store.create_bucket(ctx.bucket)
    return ctx.bucket
