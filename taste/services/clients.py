# taste/services/clients.py
from __future__ import annotations
import enum
from typing import Dict, Iterable, List
from urllib.parse import unquote

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

# Rekognition solo acepta [a-zA-Z0-9_.\-:]+ en ExternalImageId (máx. 255).
# Cualquier otro byte de la key (incluidos "/" y ":") va escapado como ":XX".
_EXTERNAL_ID_SAFE = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_.-")
_EXTERNAL_ID_ESCAPE = ":"
MAX_EXTERNAL_IMAGE_ID_LENGTH = 255

# DeleteFaces acepta como máximo 4096 ids por llamada
MAX_FACE_IDS_PER_DELETE = 4096


def s3(region: str, access_key: str = "", secret_key: str = "", config: Config | None = None):
    return boto3.client(
        "s3",
        aws_access_key_id=access_key or None,
        aws_secret_access_key=secret_key or None,
        region_name=region,
        config=config,
    )


def rekognition(region: str, access_key: str = "", secret_key: str = "", config: Config | None = None):
    return boto3.client(
        "rekognition",
        aws_access_key_id=access_key or None,
        aws_secret_access_key=secret_key or None,
        region_name=region,
        config=config,
    )


def client_config(connect_timeout: float, read_timeout: float) -> Config:
    return Config(
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        retries={"max_attempts": 3, "mode": "standard"},
    )


def to_external_image_id(key: str) -> str:
    return "".join(
        chr(b) if b in _EXTERNAL_ID_SAFE else f"{_EXTERNAL_ID_ESCAPE}{b:02X}"
        for b in key.encode("utf-8")
    )


def from_external_image_id(external_image_id: str) -> str:
    # el id codificado nunca trae "%", así que ":XX" -> "%XX" es reversible
    return unquote(external_image_id.replace(_EXTERNAL_ID_ESCAPE, "%"))


# ---------------------------
# Errores de Rekognition
# ---------------------------
class FaceErrorKind(enum.Enum):
    INVALID_IMAGE = "invalid_image"
    THROTTLED = "throttled"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


_ERROR_KINDS = {
    "InvalidImageFormatException": FaceErrorKind.INVALID_IMAGE,
    "InvalidParameterException": FaceErrorKind.INVALID_IMAGE,
    "ProvisionedThroughputExceededException": FaceErrorKind.THROTTLED,
    "ThrottlingException": FaceErrorKind.THROTTLED,
    "ResourceNotFoundException": FaceErrorKind.NOT_FOUND,
}


class FaceRecognitionError(Exception):
    def __init__(self, kind: FaceErrorKind, code: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.code = code

    @classmethod
    def from_client_error(cls, error: ClientError) -> "FaceRecognitionError":
        err = error.response.get("Error", {})
        code = err.get("Code", "")
        return cls(_ERROR_KINDS.get(code, FaceErrorKind.UNKNOWN), code, err.get("Message", str(error)))


# ---------------------------
# S3
# ---------------------------
class ObjectStore:
    """Operaciones sobre buckets/objetos S3 usadas por el subsistema de gustos."""

    def __init__(self, client, region: str):
        self.client = client
        self.region = region

    def list_buckets(self) -> List[str]:
        resp = self.client.list_buckets()
        return [b["Name"] for b in resp.get("Buckets", [])]

    def create_bucket(self, bucket: str) -> None:
        kw = {"Bucket": bucket}
        # us-east-1 rechaza LocationConstraint explícito
        if self.region and self.region != "us-east-1":
            kw["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        self.client.create_bucket(**kw)

    def list_objects(self, bucket: str, prefix: str) -> List[str]:
        keys = []
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            keys += [o["Key"] for o in page.get("Contents", [])]
        return keys

    def put_object(self, bucket: str, key: str, body: bytes, content_type: str = "image/jpeg") -> None:
        self.client.put_object(Bucket=bucket, Key=key, Body=body, ContentType=content_type)

    def delete_object(self, bucket: str, key: str) -> None:
        self.client.delete_object(Bucket=bucket, Key=key)

    def copy_object(self, bucket: str, src_key: str, dst_key: str) -> None:
        self.client.copy_object(
            Bucket=bucket,
            Key=dst_key,
            CopySource={"Bucket": bucket, "Key": src_key},
        )


# ---------------------------
# Rekognition
# ---------------------------
class FaceRecognition:
    """
    Envoltorio de Rekognition. Todo ClientError sale como FaceRecognitionError
    con su FaceErrorKind, así los pipelines no comparan códigos de AWS.
    Los ExternalImageId se devuelven ya decodificados como keys de S3.
    """

    def __init__(self, client):
        self.client = client

    def _call(self, operation: str, **kwargs) -> Dict:
        try:
            return getattr(self.client, operation)(**kwargs)
        except ClientError as e:
            raise FaceRecognitionError.from_client_error(e) from e

    def list_collections(self) -> List[str]:
        ids, token = [], None
        while True:
            kw = {"NextToken": token} if token else {}
            resp = self._call("list_collections", **kw)
            ids += resp.get("CollectionIds", [])
            token = resp.get("NextToken")
            if not token:
                return ids

    def create_collection(self, collection_id: str) -> None:
        self._call("create_collection", CollectionId=collection_id)

    def list_faces(self, collection_id: str) -> List[Dict[str, str]]:
        faces, token = [], None
        while True:
            kw = {"CollectionId": collection_id}
            if token:
                kw["NextToken"] = token
            resp = self._call("list_faces", **kw)
            for f in resp.get("Faces", []):
                faces.append({
                    "FaceId": f["FaceId"],
                    "ExternalImageId": from_external_image_id(f.get("ExternalImageId", "")),
                })
            token = resp.get("NextToken")
            if not token:
                return faces

    def index_faces(self, collection_id: str, bucket: str, key: str) -> List[str]:
        """Indexa las caras de s3://bucket/key y devuelve los FaceId creados."""
        external_image_id = to_external_image_id(key)
        # una key demasiado larga no es una imagen inválida: no debe purgarse
        if len(external_image_id) > MAX_EXTERNAL_IMAGE_ID_LENGTH:
            raise FaceRecognitionError(
                FaceErrorKind.UNKNOWN, "ExternalImageIdTooLong",
                f"key {key} exceeds {MAX_EXTERNAL_IMAGE_ID_LENGTH} chars once encoded",
            )
        resp = self._call(
            "index_faces",
            CollectionId=collection_id,
            Image={"S3Object": {"Bucket": bucket, "Name": key}},
            ExternalImageId=external_image_id,
            DetectionAttributes=["DEFAULT"],
        )
        return [r["Face"]["FaceId"] for r in resp.get("FaceRecords", [])]

    def delete_faces(self, collection_id: str, face_ids: Iterable[str]) -> int:
        face_ids = list(face_ids)
        deleted = 0
        for i in range(0, len(face_ids), MAX_FACE_IDS_PER_DELETE):
            chunk = face_ids[i:i + MAX_FACE_IDS_PER_DELETE]
            resp = self._call("delete_faces", CollectionId=collection_id, FaceIds=chunk)
            deleted += len(resp.get("DeletedFaces", chunk))
        return deleted

    def search_faces_by_image(self, collection_id: str, bucket: str, key: str) -> List[float]:
        """Similitudes (0-100) de las caras del collection que se parecen a la imagen."""
        resp = self._call(
            "search_faces_by_image",
            CollectionId=collection_id,
            Image={"S3Object": {"Bucket": bucket, "Name": key}},
        )
        return [float(m.get("Similarity", 0.0)) for m in resp.get("FaceMatches", [])]
