# taste/services/errors.py


class InvalidArgumentsError(ValueError):
    """Falta channel/photo/photos en una llamada del pipeline."""

    def __init__(self, message: str = "invalid arguments"):
        super().__init__(message)


class PhotoDownloadError(RuntimeError):
    """La descarga HTTP de la foto no devolvió 200."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        super().__init__(f"Unable to download photo {url} because of {status_code} {reason}".rstrip())
        self.url = url
        self.status_code = status_code


class PhotoFormatError(RuntimeError):
    """Lo descargado no es una imagen que Pillow pueda abrir."""

    def __init__(self, url: str):
        super().__init__(f"Downloaded photo {url} is not a readable image")
        self.url = url
