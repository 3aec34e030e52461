"""
Listing endpoints shared by the teacher and student routers

Endpoints (per role, e.g. /api/v1/teachers):
- GET  ""                         - browse, filtered by district, optionally newest first
- GET  "/by-district/{district}"  - server-side district query
- GET  "/mine"                    - listings created by the caller
- GET  "/{listing_id}"            - one listing
- GET  "/{listing_id}/contact"    - phone dialer link
- POST ""                         - create a listing (multipart, optional photo)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from tutorhub.dependencies import (
    get_current_user,
    get_listing_reader,
    get_listing_submitter,
)
from tutorhub.exceptions import (
    AuthenticationRequiredError,
    FormValidationError,
    RemoteStoreError,
    SubmissionError,
)
from tutorhub.listings.contact import dial_url
from tutorhub.listings.forms import form_for
from tutorhub.listings.pipeline import ListingStore
from tutorhub.listings.submission import ListingSubmitter, PhotoUpload
from tutorhub.models.listing import ListingRecord, Role
from tutorhub.models.user import CurrentUser
from tutorhub.schemas.listing import (
    ContactResponse,
    FormErrorResponse,
    ListingListResponse,
    ListingViewResponse,
)

logger = logging.getLogger(__name__)


def build_listing_router(role: Role) -> APIRouter:
    """Router for one role's collection; both roles expose the same surface"""
    role = Role(role)
    router = APIRouter(prefix=f"/api/v1/{role.value}s", tags=[f"{role.value}s"])

    async def _load_one(reader, listing_id: str) -> ListingRecord:
        try:
            listing = await reader.get_listing(role, listing_id)
        except RemoteStoreError as e:
            logger.error(f"Failed to load {role.value} {listing_id}: {e}")
            raise HTTPException(status_code=502, detail="Listing store unavailable")
        if listing is None:
            raise HTTPException(
                status_code=404, detail=f"{role.value.capitalize()} not found")
        return listing

    @router.get("", response_model=ListingViewResponse)
    async def browse_listings(
        district: Optional[str] = Query(None),
        sort_newest: bool = Query(False, alias="sortNewest"),
        reader=Depends(get_listing_reader),
    ):
        """
        Fetch the whole collection, then filter by district and sort in memory.
        A failed fetch is reported as an empty list with ``error`` set.
        """
        store = ListingStore(reader, role)
        try:
            await store.load()
        finally:
            store.close()
        store.select_district(district)
        store.set_sort_newest(sort_newest)
        view = store.view
        return ListingViewResponse(
            listings=view,
            total=len(view),
            district=store.district,
            sort_newest=store.sort_newest,
            available_districts=store.available_districts,
            error=store.error,
        )

    @router.get("/by-district/{district}", response_model=ListingListResponse)
    async def listings_in_district(district: str, reader=Depends(get_listing_reader)):
        try:
            listings = await reader.fetch_by_district(role, district)
        except RemoteStoreError as e:
            logger.error(f"District query for {role.value}s in {district} failed: {e}")
            listings = []
        return ListingListResponse(listings=listings, total=len(listings))

    @router.get("/mine", response_model=ListingListResponse)
    async def my_listings(
        current_user: CurrentUser = Depends(get_current_user),
        reader=Depends(get_listing_reader),
    ):
        try:
            listings = await reader.fetch_by_owner(role, current_user.uid)
        except RemoteStoreError as e:
            logger.error(f"Error fetching {role.value} listings of {current_user.uid}: {e}")
            listings = []
        return ListingListResponse(listings=listings, total=len(listings))

    @router.get("/{listing_id}", response_model=ListingRecord)
    async def get_listing(listing_id: str, reader=Depends(get_listing_reader)):
        return await _load_one(reader, listing_id)

    @router.get("/{listing_id}/contact", response_model=ContactResponse)
    async def contact_listing(listing_id: str, reader=Depends(get_listing_reader)):
        listing = await _load_one(reader, listing_id)
        try:
            url = dial_url(listing.phone_number)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return ContactResponse(phone_number=listing.phone_number.strip(), dial_url=url)

    @router.post("", response_model=ListingRecord, status_code=status.HTTP_201_CREATED)
    async def create_listing(
        name: str = Form(""),
        subject: str = Form(""),
        phone_number: str = Form("", alias="phoneNumber"),
        province: str = Form(""),
        district: str = Form(""),
        specific_location: str = Form("", alias="specificLocation"),
        experience: str = Form(""),
        grade: str = Form(""),
        salary: str = Form(""),
        teaching_hours: str = Form("", alias="teachingHours"),
        photo_url: str = Form("", alias="photoURL"),
        photo: Optional[UploadFile] = File(None),
        current_user: CurrentUser = Depends(get_current_user),
        submitter: ListingSubmitter = Depends(get_listing_submitter),
    ):
        form = form_for(role, {
            "name": name,
            "subject": subject,
            "phone_number": phone_number,
            "province": province,
            "district": district,
            "specific_location": specific_location,
            "experience": experience,
            "grade": grade,
            "salary": salary,
            "teaching_hours": teaching_hours,
        })

        upload = None
        if photo is not None and photo.filename:
            upload = PhotoUpload(
                content=await photo.read(),
                filename=photo.filename,
                content_type=photo.content_type or "image/jpeg",
            )

        try:
            return await submitter.submit(
                form, current_user.uid, photo=upload, photo_url=photo_url)
        except FormValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=FormErrorResponse(
                    message="Please fix the highlighted fields", errors=e.errors
                ).model_dump(),
            )
        except AuthenticationRequiredError as e:
            raise HTTPException(status_code=401, detail=str(e))
        except SubmissionError as e:
            raise HTTPException(status_code=502, detail=str(e))

    return router
