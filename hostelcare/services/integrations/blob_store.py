"""
Image storage backed by Cloudinary.

Uploads are best effort: a failed upload is logged and reported as ``None``
so the calling operation can continue without an image. The local file is
always removed once the attempt is over.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import cloudinary
import cloudinary.uploader

from hostelcare.config.settings import Settings, settings as default_settings
from hostelcare.core.logging import get_logger
from hostelcare.utils.file_handler import discard_file

logger = get_logger(__name__)


class BlobStore(ABC):
    """Accepts a local file and returns a public URL, or None on failure."""

    @abstractmethod
    def upload(self, local_path: Optional[str]) -> Optional[str]:
        """Upload and remove ``local_path``; never raises."""


class CloudinaryBlobStore(BlobStore):

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or default_settings
        self.timeout = self.settings.BLOB_UPLOAD_TIMEOUT_SECONDS
        self.configured = self.settings.cloudinary_configured()
        if self.configured:
            cloudinary.config(
                cloud_name=self.settings.CLOUDINARY_CLOUD_NAME,
                api_key=self.settings.CLOUDINARY_API_KEY,
                api_secret=self.settings.CLOUDINARY_API_SECRET,
                secure=True,
            )

    def upload(self, local_path: Optional[str]) -> Optional[str]:
        if not local_path:
            return None

        try:
            if not self.configured:
                logger.warning("Cloudinary is not configured; skipping image upload")
                return None

            options: Dict[str, Any] = {
                "resource_type": "auto",
                "timeout": self.timeout,
            }
            result = cloudinary.uploader.upload(local_path, **options)
            url = result.get("secure_url") or result.get("url")
            logger.info("Image uploaded", extra={"public_id": result.get("public_id")})
            return url

        except Exception as e:
            logger.warning(
                f"Image upload failed: {e}",
                extra={"exception_type": type(e).__name__},
            )
            return None

        finally:
            discard_file(local_path)


_blob_store: Optional[BlobStore] = None


def get_blob_store() -> BlobStore:
    """Process-wide blob store instance."""
    global _blob_store
    if _blob_store is None:
        _blob_store = CloudinaryBlobStore()
    return _blob_store
