"""
Photo hosting on Cloudinary

Uploads use an unsigned upload preset, so no API secret is needed on the
server. Only the returned ``secure_url`` is stored on the listing.
"""

import logging
import time
from typing import Optional

import httpx

from tutorhub.config import settings
from tutorhub.exceptions import MediaUploadError

logger = logging.getLogger(__name__)


class CloudinaryUploader:
    """Thin async wrapper around the Cloudinary upload endpoint"""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        upload_preset: Optional[str] = None,
        folder: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cloud_name = cloud_name if cloud_name is not None else settings.CLOUDINARY_CLOUD_NAME
        self.upload_preset = (
            upload_preset if upload_preset is not None else settings.CLOUDINARY_UPLOAD_PRESET)
        self.folder = folder if folder is not None else settings.CLOUDINARY_FOLDER
        self.timeout = timeout or settings.CLOUDINARY_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.upload_preset)

    @property
    def upload_url(self) -> str:
        return settings.CLOUDINARY_UPLOAD_URL.format(cloud_name=self.cloud_name)

    async def upload(
        self, content: bytes, filename: str = "upload.jpg", content_type: str = "image/jpeg"
    ) -> str:
        """
        Upload an image and return its HTTPS URL

        Raises:
            MediaUploadError: not configured, rejected, or unreachable
        """
        if not self.configured:
            raise MediaUploadError("Cloudinary is not configured")
        if not content:
            raise MediaUploadError("Empty image")
        if len(content) > settings.MAX_PHOTO_BYTES:
            raise MediaUploadError(
                f"Image too large (max {settings.MAX_PHOTO_BYTES // (1024 * 1024)}MB)")

        form = {
            "upload_preset": self.upload_preset,
            "folder": self.folder,
            "public_id": f"listing_{int(time.time())}",
        }
        files = {"file": (filename or "upload.jpg", content, content_type)}

        logger.info(f"Uploading {len(content)} bytes to Cloudinary folder {self.folder}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.upload_url,
                    data=form,
                    files=files,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Error uploading to Cloudinary: {e}")
            raise MediaUploadError(f"Upload request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Cloudinary response error: {response.text}")
            raise MediaUploadError(
                f"Upload failed with status {response.status_code}")

        data = response.json()
        if data.get("error"):
            message = data["error"].get("message", "Unknown error")
            logger.error(f"Cloudinary upload error: {message}")
            raise MediaUploadError(message)

        secure_url = data.get("secure_url")
        if not secure_url:
            raise MediaUploadError("Cloudinary response has no secure_url")
        logger.info(f"Upload successful: {secure_url}")
        return secure_url


media_service = CloudinaryUploader()
