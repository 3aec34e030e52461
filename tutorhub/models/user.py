"""
User Models for TutorHub Backend

Identity lives in Firebase Authentication. Firestore only keeps the role a
user picked after signing up.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from tutorhub.models.listing import Role


# Helper function for timezone-aware UTC datetime
def utc_now():
    """Get current UTC datetime (timezone-aware)"""
    return datetime.now(timezone.utc)


class CurrentUser(BaseModel):
    """The signed-in user as reported by a verified Firebase ID token"""

    uid: str = Field(..., description="Firebase Authentication UID")
    display_name: Optional[str] = Field(
        default=None, description="User's display name", alias="displayName")
    email: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class UserAccount(BaseModel):
    """
    Account document

    Collection: users/
    Document ID: uid (Firebase Auth UID)
    """

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    role: Optional[Role] = Field(
        default=None, description="Chosen side of the marketplace")
    created_at: Optional[datetime] = Field(
        default_factory=utc_now, alias="createdAt")
    updated_at: Optional[datetime] = Field(
        default_factory=utc_now, alias="updatedAt")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "uid": "firebase_user_uid_123",
                "email": "sita@example.com",
                "display_name": "Sita Sharma",
                "role": "teacher",
            }
        }
    )


# Helper function to convert Firestore document to UserAccount model
def firestore_account_to_model(doc_data: dict, uid: str) -> UserAccount:
    return UserAccount.model_validate({**doc_data, "uid": uid})


# Helper function to convert UserAccount model to Firestore document
def account_model_to_firestore(account: UserAccount) -> dict:
    # Use by_alias=True to get camelCase for Firestore
    data = account.model_dump(by_alias=True, mode="python")
    # Exclude uid as it's the document ID
    data.pop("uid", None)
    if account.role is not None:
        data["role"] = account.role.value
    return data
