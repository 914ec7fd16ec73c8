"""
Content-addressed image storage.

Every blob is keyed by ``<sha256 hex>.jpg``; identical bytes always land on
the same key, so writes are idempotent and need no coordination.
"""
import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from catalog_service.core.domain.errors import PersistenceError, ValidationError
from catalog_service.core.ports.repository import ImageStorePort

logger = logging.getLogger(__name__)

IMAGE_SUFFIX = ".jpg"
DEFAULT_PLACEHOLDER = "default.jpg"


def content_address(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest() + IMAGE_SUFFIX


def validate_reference(reference: str) -> None:
    """Reject anything that is not a bare ``*.jpg`` file name."""
    if not reference.endswith(IMAGE_SUFFIX):
        raise ValidationError(f"Image path does not end with {IMAGE_SUFFIX}")
    if reference == IMAGE_SUFFIX or any(c in reference for c in ("/", "\\", "\x00")):
        raise ValidationError(f"Invalid image reference: {reference!r}")


class FileImageStore(ImageStorePort):
    """
    Flat-directory image store.

    Blobs are written to a temporary file next to their destination and
    renamed into place, so a reader never observes a partial image.
    """

    def __init__(self, image_dir, placeholder: str = DEFAULT_PLACEHOLDER):
        self.image_dir = Path(image_dir)
        self.placeholder = placeholder

    def put(self, data: bytes) -> str:
        reference = content_address(data)
        try:
            self.image_dir.mkdir(parents=True, exist_ok=True)
            destination = self.image_dir / reference
            if destination.exists():
                logger.debug(f"Image {reference} already stored, skipping write")
                return reference

            with tempfile.NamedTemporaryFile(
                "wb", dir=str(self.image_dir), prefix=f"{reference}.", suffix=".tmp", delete=False
            ) as handle:
                tmp = Path(handle.name)
                try:
                    handle.write(data)
                    handle.flush()
                    os.fsync(handle.fileno())
                except OSError:
                    handle.close()
                    tmp.unlink(missing_ok=True)
                    raise
            os.replace(tmp, destination)
        except OSError as e:
            raise PersistenceError(f"could not store image {reference}") from e

        logger.info(f"Stored image {reference} ({len(data)} bytes)")
        return reference

    def get(self, reference: str) -> bytes:
        validate_reference(reference)

        path = self.image_dir / reference
        if not path.is_file():
            logger.debug(f"Image not found: {path}")
            path = self.image_dir / self.placeholder

        try:
            return path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"could not read image {path}") from e


class InMemoryImageStore(ImageStorePort):
    """Dict-backed image store for tests and embedding."""

    def __init__(self, placeholder: bytes = b"", blobs: Optional[Dict[str, bytes]] = None):
        self.placeholder = placeholder
        self.blobs: Dict[str, bytes] = dict(blobs or {})

    def put(self, data: bytes) -> str:
        reference = content_address(data)
        self.blobs.setdefault(reference, bytes(data))
        return reference

    def get(self, reference: str) -> bytes:
        validate_reference(reference)
        data = self.blobs.get(reference)
        if data is None:
            logger.debug(f"Image not found: {reference}")
            return self.placeholder
        return data
