# taste/services/photos.py
from __future__ import annotations
import io
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlparse

from PIL import Image, ImageOps, UnidentifiedImageError

from taste.services.context import PHOTOS_PREFIX, TasteContext
from taste.services.errors import InvalidArgumentsError, PhotoDownloadError, PhotoFormatError

CACHE_PREFIX = "cache/images/"

THUMBNAIL_SIZE = (84, 84)
THUMBNAIL_PREPEND = "84x84_"


@dataclass(frozen=True)
class PhotoPatch:
    """Cambios a aplicar sobre una foto (dict) una vez terminado el lote."""
    url: Optional[str] = None
    similarity: Optional[float] = None
    similarity_date: Optional[str] = None

    def apply(self, photo: Dict[str, Any]) -> Dict[str, Any]:
        for field in ("url", "similarity", "similarity_date"):
            value = getattr(self, field)
            if value is not None:
                photo[field] = value
        return photo


@dataclass(frozen=True)
class SavedPhoto:
    key: str
    url: str
    body: bytes


def resize_image(body: bytes, width: int, height: int) -> bytes:
    """Recorta y escala al tamaño pedido (cover), conservando el formato original."""
    with Image.open(io.BytesIO(body)) as img:
        fmt = img.format or "JPEG"
        resized = ImageOps.fit(img, (width, height))
        if fmt == "JPEG" and resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")
        out = io.BytesIO()
        resized.save(out, format=fmt)
        return out.getvalue()


def relative_path(ctx: TasteContext, channel: str, path: str) -> str:
    """Path de la foto sin prefijos de cache ni de bucket: "<dir>/<archivo>"."""
    return (
        path[1:]
        .replace(CACHE_PREFIX, "")
        .replace(f"{ctx.bucket}/{PHOTOS_PREFIX}/{channel}/", "")
    )


def prepend_to_filename(pathname: str, prepend: str) -> str:
    head, sep, tail = pathname.rpartition("/")
    return f"{head}{sep}{prepend}{tail}"


def download(ctx: TasteContext, url: str) -> bytes:
    resp = ctx.http.get(url, timeout=ctx.http_timeout)
    if resp.status_code != 200:
        raise PhotoDownloadError(url, resp.status_code, resp.reason or "")
    return resp.content


def save_photo(
    ctx: TasteContext,
    channel: str,
    photo: Mapping[str, Any],
    resize: Optional[Tuple[int, int]] = None,
    rename: Optional[str] = None,
) -> SavedPhoto:
    """
    Descarga la foto, la sube a photos/<channel>/<path> y devuelve la nueva URL.
    No modifica `photo`; quien llama decide si aplica la URL.
    - resize: (width, height) opcional
    - rename: texto a anteponer al nombre de archivo (thumbnails)
    """
    if not channel or not photo:
        raise InvalidArgumentsError()

    url = urlparse(photo.get("url") or "")
    if not url.scheme or not url.netloc:
        raise InvalidArgumentsError("invalid photo url")

    body = download(ctx, url.geturl())
    if resize:
        try:
            body = resize_image(body, *resize)
        except UnidentifiedImageError as e:
            raise PhotoFormatError(url.geturl()) from e

    pathname = relative_path(ctx, channel, url.path)
    if rename:
        pathname = prepend_to_filename(pathname, rename)

    key = f"{PHOTOS_PREFIX}/{channel}/{pathname}"
    ctx.object_store.put_object(ctx.bucket, key, body)

    return SavedPhoto(key=key, url=ctx.object_url(key), body=body)
