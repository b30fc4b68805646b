# taste/services/taste.py
from __future__ import annotations
import copy
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from taste.models import TasteSettings
from taste.services import acquisition, checkout, provisioning, sync
from taste.services.context import TasteContext
from taste.services.errors import InvalidArgumentsError
from taste.services.photos import THUMBNAIL_PREPEND, THUMBNAIL_SIZE, save_photo

logger = logging.getLogger(__name__)


class Taste:
    """
    Fachada del subsistema de gustos. La crea el punto de entrada del proceso
    (TasteConfig.ready o un management command) con su TasteContext.

    Una sola sincronización a la vez por proceso: si ya hay una corriendo,
    sync() devuelve None. Entre procesos no hay exclusión; se asume que
    solo un proceso sincroniza.
    """

    def __init__(self, ctx: TasteContext):
        self.ctx = ctx
        self._provision_lock = threading.Lock()
        self._sync_lock = threading.Lock()
        self._provisioned = False

    # ---------------------------
    # Arranque
    # ---------------------------
    def provision(self) -> None:
        """Resuelve/crea collection y bucket en paralelo. Los errores se propagan."""
        with self._provision_lock:
            if self._provisioned:
                return
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="taste-provision") as executor:
                futures = [
                    executor.submit(provisioning.ensure_collection, self.ctx),
                    executor.submit(provisioning.ensure_bucket, self.ctx),
                ]
                for future in futures:
                    future.result()
            self._provisioned = True

    def start(self) -> Optional[sync.SyncReport]:
        self.provision()
        return self.sync()

    def sync(self) -> Optional[sync.SyncReport]:
        self.provision()
        if not self._sync_lock.acquire(blocking=False):
            logger.info("Face collection sync already running, skipping")
            return None
        try:
            return sync.sync_bucket_and_collection(self.ctx)
        finally:
            self._sync_lock.release()

    # ---------------------------
    # API
    # ---------------------------
    def find_or_create_settings(self) -> TasteSettings:
        return TasteSettings.find_or_create()

    def check_photos_out(self, channel: str, photos: List[Dict[str, Any]]) -> checkout.CheckOutResult:
        if not channel or photos is None:
            raise InvalidArgumentsError()
        self.provision()

        not_checked_out = [p for p in photos if not checkout.is_checked_out(p)]
        settings = self.find_or_create_settings()

        result = checkout.check_photos_out(self.ctx, channel, photos, settings.like_photos_threshold)

        if not_checked_out:
            logger.debug("Compared %d photo(s)", len(not_checked_out))
        return result

    def acquire_taste(self, photos: List[Dict[str, Any]]) -> int:
        if photos is None:
            raise InvalidArgumentsError()
        self.provision()
        return acquisition.acquire_taste(self.ctx, photos)

    def mental_snapshot(self, channel: str, photo: Dict[str, Any]) -> str:
        """Guarda una miniatura 84x84 de la foto y devuelve su URL. No toca `photo`."""
        if not channel or not photo:
            raise InvalidArgumentsError()
        self.provision()

        thumbnail = copy.deepcopy(photo)
        saved = save_photo(self.ctx, channel, thumbnail, resize=THUMBNAIL_SIZE, rename=THUMBNAIL_PREPEND)
        return saved.url
