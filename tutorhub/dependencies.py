"""
FastAPI dependency injection for authentication and services
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from tutorhub.exceptions import InvalidTokenError
from tutorhub.listings.locations import DEFAULT_LOOKUP, LocationLookup
from tutorhub.listings.submission import ListingSubmitter
from tutorhub.models.user import CurrentUser
from tutorhub.services.auth_service import auth_service
from tutorhub.services.firebase_service import firebase_service
from tutorhub.services.media_service import media_service

logger = logging.getLogger(__name__)

# Security scheme for Firebase ID tokens
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """
    Dependency to get the current authenticated user from a Firebase ID token

    Raises:
        HTTPException: If the token is missing or invalid
    """
    try:
        return await auth_service.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_location_lookup() -> LocationLookup:
    return DEFAULT_LOOKUP


def get_listing_reader():
    """Remote collection reader backing the listing endpoints"""
    return firebase_service


def get_listing_submitter(
    lookup: LocationLookup = Depends(get_location_lookup),
) -> ListingSubmitter:
    return ListingSubmitter(firebase_service, media_service, lookup)
