"""
Schemas for listing responses
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Optional, List

from tutorhub.models.listing import ListingRecord


class ListingViewResponse(BaseModel):
    """Filtered and sorted listings plus the state that produced them"""

    listings: List[ListingRecord]
    total: int
    district: str = ""
    sort_newest: bool = Field(False, alias="sortNewest")
    available_districts: List[str] = Field(
        default_factory=list, alias="availableDistricts")
    error: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "listings": [
                    {
                        "id": "Xk2a9",
                        "role": "teacher",
                        "ownerId": "uid_123",
                        "name": "Sita Sharma",
                        "subject": "Mathematics",
                        "phoneNumber": "9800000000",
                        "province": "Gandaki Province",
                        "district": "Kaski",
                        "specificLocation": "Lakeside",
                        "photoURL": "",
                        "experience": 4,
                        "createdAt": "2024-05-01T10:00:00Z",
                    }
                ],
                "total": 1,
                "district": "Kaski",
                "sortNewest": True,
                "availableDistricts": ["Kaski", "Lalitpur"],
                "error": None,
            }
        }
    )


class ListingListResponse(BaseModel):
    listings: List[ListingRecord]
    total: int


class ContactResponse(BaseModel):
    phone_number: str = Field(..., alias="phoneNumber")
    dial_url: str = Field(..., alias="dialUrl")

    model_config = ConfigDict(populate_by_name=True)


class FormErrorResponse(BaseModel):
    message: str
    errors: Dict[str, str]
