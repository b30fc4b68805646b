# taste/services/context.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import requests
from django.conf import settings

from taste.services import clients
from taste.services.concurrency import DEFAULT_CONCURRENCY

TRAIN_PREFIX = "train"
PHOTOS_PREFIX = "photos"
DEFAULT_RESOURCE_PREFIX = "get-me-a-date-"


@dataclass
class TasteContext:
    """
    Todo lo que necesitan los pipelines: clientes, nombres resueltos y límites.
    bucket/collection quedan en None hasta que el provisioning los resuelve
    (salvo que vengan configurados).
    """
    object_store: clients.ObjectStore
    faces: clients.FaceRecognition
    http: requests.Session
    region: str
    bucket: Optional[str] = None
    collection: Optional[str] = None
    resource_prefix: str = DEFAULT_RESOURCE_PREFIX
    concurrency: int = DEFAULT_CONCURRENCY
    http_timeout: float = 30.0

    def object_url(self, key: str) -> str:
        return f"https://s3-{self.region}.amazonaws.com/{self.bucket}/{key}"


def build_context() -> TasteContext:
    """Arma el contexto desde settings (env). No hace llamadas de red."""
    region = settings.AWS_REGION
    cfg = clients.client_config(settings.AWS_CONNECT_TIMEOUT, settings.AWS_READ_TIMEOUT)
    access_key = settings.AWS_ACCESS_KEY_ID
    secret_key = settings.AWS_SECRET_ACCESS_KEY

    return TasteContext(
        object_store=clients.ObjectStore(clients.s3(region, access_key, secret_key, cfg), region),
        faces=clients.FaceRecognition(clients.rekognition(region, access_key, secret_key, cfg)),
        http=requests.Session(),
        region=region,
        bucket=settings.AWS_S3_BUCKET or None,
        collection=settings.AWS_REKOGNITION_COLLECTION or None,
        resource_prefix=settings.TASTE_RESOURCE_PREFIX or DEFAULT_RESOURCE_PREFIX,
        concurrency=settings.TASTE_CONCURRENCY,
        http_timeout=settings.TASTE_HTTP_TIMEOUT,
    )
