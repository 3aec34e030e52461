"""
Data models for TutorHub
"""

from tutorhub.models.listing import (
    ListingRecord,
    Role,
    StudentListing,
    TeacherListing,
)
from tutorhub.models.user import CurrentUser, UserAccount

__all__ = [
    "ListingRecord",
    "Role",
    "StudentListing",
    "TeacherListing",
    "CurrentUser",
    "UserAccount",
]
