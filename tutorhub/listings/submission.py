"""
Listing submission: validate locally, upload the photo, then write.

The photo upload finishes (or is skipped) before the record is written, so a
failed upload never leaves a listing behind. The form is not modified, which
lets the caller resubmit the same draft after a failure.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from tutorhub.exceptions import (
    AuthenticationRequiredError,
    FormValidationError,
    MediaUploadError,
    RemoteStoreError,
    SubmissionError,
)
from tutorhub.listings.forms import ListingForm
from tutorhub.listings.locations import DEFAULT_LOOKUP, LocationLookup
from tutorhub.models.listing import ListingRecord, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoUpload:
    content: bytes
    filename: str = "upload.jpg"
    content_type: str = "image/jpeg"


class ListingWriter(Protocol):
    async def create_listing(self, role: Role, data: dict) -> ListingRecord:
        ...


class MediaUploader(Protocol):
    async def upload(self, content: bytes, filename: str, content_type: str) -> str:
        ...


class ListingSubmitter:
    """Runs one registration form through validation, upload and write"""

    def __init__(
        self,
        writer: ListingWriter,
        uploader: Optional[MediaUploader] = None,
        lookup: LocationLookup = DEFAULT_LOOKUP,
    ):
        self.writer = writer
        self.uploader = uploader
        self.lookup = lookup

    async def submit(
        self,
        form: ListingForm,
        owner_id: Optional[str],
        photo: Optional[PhotoUpload] = None,
        photo_url: str = "",
    ) -> ListingRecord:
        errors = form.validate_form(self.lookup)
        if errors:
            raise FormValidationError(errors)

        if not owner_id:
            raise AuthenticationRequiredError(
                "You must be logged in to create a profile")

        if photo is not None and photo.content:
            if self.uploader is None:
                raise SubmissionError("Photo uploads are not configured")
            try:
                photo_url = await self.uploader.upload(
                    photo.content, photo.filename, photo.content_type)
            except MediaUploadError as e:
                logger.error(f"Photo upload failed for {owner_id}: {e}")
                raise SubmissionError(f"Photo upload failed: {e}") from e

        data = form.to_firestore(owner_id, photo_url)
        try:
            listing = await self.writer.create_listing(form.role, data)
        except RemoteStoreError as e:
            logger.error(
                f"Failed to create {form.role.value} listing for {owner_id}: {e}")
            raise SubmissionError(
                f"Error creating {form.role.value} profile: {e}") from e

        logger.info(
            f"Created {form.role.value} listing {listing.id} for {owner_id}")
        return listing
