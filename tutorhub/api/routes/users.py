"""
Signed-in user's account and role choice
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from tutorhub.dependencies import get_current_user
from tutorhub.exceptions import RemoteStoreError
from tutorhub.models.user import CurrentUser
from tutorhub.schemas.user import AccountResponse, RoleUpdate
from tutorhub.services.auth_service import auth_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/me", response_model=AccountResponse)
async def get_my_account(current_user: CurrentUser = Depends(get_current_user)):
    try:
        account = await auth_service.get_account(current_user)
    except RemoteStoreError as e:
        logger.error(f"Failed to load account {current_user.uid}: {e}")
        raise HTTPException(status_code=502, detail="Account store unavailable")
    return AccountResponse.model_validate(account)


@router.put("/me/role", response_model=AccountResponse)
async def choose_role(
    data: RoleUpdate, current_user: CurrentUser = Depends(get_current_user)
):
    """Record whether the user browses as a student or a teacher"""
    try:
        account = await auth_service.choose_role(current_user, data.role)
    except RemoteStoreError:
        raise HTTPException(status_code=502, detail="Could not save role")
    return AccountResponse.model_validate(account)
