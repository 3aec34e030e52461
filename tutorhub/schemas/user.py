"""
Schemas for the signed-in user's account
"""

from pydantic import BaseModel, Field, ConfigDict, computed_field
from typing import Optional

from tutorhub.models.listing import Role


class AccountResponse(BaseModel):
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    role: Optional[Role] = None

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    @computed_field
    @property
    def browses(self) -> Optional[Role]:
        """Listings this user is shown: students browse teachers and vice versa"""
        return self.role.counterpart if self.role else None


class RoleUpdate(BaseModel):
    role: Role
