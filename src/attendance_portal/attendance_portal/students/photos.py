from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.constants import DEFAULT_ALLOWED_PHOTO_EXTENSIONS, UPLOADS_URL_PREFIX
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class PhotoStorage:
    """Store uploaded student photos on local disk.

    Files are named ``<epoch-millis>-<original name>``; identical uploads are
    stored twice.
    """

    def __init__(
        self,
        folder: str | Path,
        *,
        allowed_extensions: Iterable[str] = DEFAULT_ALLOWED_PHOTO_EXTENSIONS,
        url_prefix: str = UPLOADS_URL_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        self._folder = Path(folder)
        self._allowed = {ext.lower().lstrip(".") for ext in allowed_extensions}
        self._url_prefix = url_prefix.rstrip("/")
        self._clock = clock

    @property
    def folder(self) -> Path:
        return self._folder

    def check(self, file: FileStorage) -> str:
        filename = secure_filename(file.filename or "")
        if not filename:
            raise ValidationError("Invalid photo filename")
        ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if self._allowed and ext not in self._allowed:
            raise ValidationError("Unsupported photo type")
        return filename

    def save(self, file: FileStorage) -> str:
        """Write the upload and return the public path stored on the student."""

        filename = self.check(file)
        stored_name = f"{int(self._clock() * 1000)}-{filename}"
        self._folder.mkdir(parents=True, exist_ok=True)
        file.save(self._folder / stored_name)
        logger.info("Stored photo %s", stored_name)
        return f"{self._url_prefix}/{stored_name}"

    def discard(self, public_path: Optional[str]) -> None:
        """Remove a file written by :meth:`save` whose student row never landed."""

        if not public_path:
            return
        stored_name = public_path.rsplit("/", 1)[-1]
        (self._folder / stored_name).unlink(missing_ok=True)
        logger.info("Discarded photo %s", stored_name)
