"""
Listing models and Firestore conversion helpers

Teachers and students publish listings into two sibling collections.
The documents carry no role field; the role is implied by the collection
and restored here as the discriminant of ``ListingRecord``.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, ConfigDict, NonNegativeInt


class Role(str, Enum):
    """Which side of the marketplace a listing belongs to"""

    TEACHER = "teacher"
    STUDENT = "student"

    @property
    def counterpart(self) -> "Role":
        return Role.STUDENT if self is Role.TEACHER else Role.TEACHER


class ListingBase(BaseModel):
    id: str
    owner_id: str = Field(..., alias="ownerId")
    name: str
    subject: str
    phone_number: str = Field(..., alias="phoneNumber")
    specific_location: str = Field(default="", alias="specificLocation")
    province: str = ""
    district: str = ""
    photo_url: str = Field(default="", alias="photoURL")
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def created_at_seconds(self) -> int:
        """Whole seconds since epoch, 0 when the store never stamped it"""
        if self.created_at is None:
            return 0
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return int(created.timestamp())


class TeacherListing(ListingBase):
    role: Literal["teacher"] = "teacher"
    experience: NonNegativeInt = 0


class StudentListing(ListingBase):
    role: Literal["student"] = "student"
    grade: str = ""
    salary: Optional[float] = None
    teaching_hours: Optional[float] = Field(None, alias="teachingHours")


ListingRecord = Annotated[
    Union[TeacherListing, StudentListing], Field(discriminator="role")
]


def _optional_number(value: Any) -> Optional[float]:
    # Older app builds wrote salary and hours as free text
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def firestore_listing_to_model(doc: dict, doc_id: str, role: Role) -> ListingRecord:
    """Build a listing from a raw Firestore document"""
    role = Role(role)
    common = dict(
        id=doc_id,
        owner_id=_text(doc.get("userId") or doc.get("ownerId")),
        name=_text(doc.get("name")),
        subject=_text(doc.get("subject")),
        phone_number=_text(doc.get("phoneNumber")),
        specific_location=_text(doc.get("specificLocation")),
        province=_text(doc.get("province")),
        district=_text(doc.get("district")),
        photo_url=_text(doc.get("photoURL")),
        created_at=doc.get("createdAt"),
    )
    if role is Role.TEACHER:
        try:
            experience = int(doc.get("experience") or 0)
        except (TypeError, ValueError):
            experience = 0
        return TeacherListing(experience=max(experience, 0), **common)

    return StudentListing(
        grade=_text(doc.get("grade") or doc.get("class")),
        salary=_optional_number(doc.get("salary")),
        teaching_hours=_optional_number(
            doc.get("teachingHours") or doc.get("hoursToTeach")),
        **common,
    )


def listing_model_to_firestore(listing: ListingRecord) -> dict:
    """Inverse of firestore_listing_to_model; id and role are not stored"""
    data = {
        "userId": listing.owner_id,
        "name": listing.name,
        "subject": listing.subject,
        "phoneNumber": listing.phone_number,
        "specificLocation": listing.specific_location,
        "province": listing.province,
        "district": listing.district,
        "photoURL": listing.photo_url,
        "createdAt": listing.created_at,
    }
    if isinstance(listing, TeacherListing):
        data["experience"] = listing.experience
    else:
        data["grade"] = listing.grade
        data["salary"] = listing.salary
        data["teachingHours"] = listing.teaching_hours
    return data
