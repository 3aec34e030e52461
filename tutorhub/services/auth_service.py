"""
Authentication service: turns Firebase ID tokens into the current user
"""

import logging

from tutorhub.exceptions import InvalidTokenError, RemoteStoreError
from tutorhub.models.listing import Role
from tutorhub.models.user import CurrentUser, UserAccount
from tutorhub.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations"""

    def __init__(self, firebase=None):
        self.firebase = firebase or firebase_service

    async def verify(self, id_token: str) -> CurrentUser:
        """
        Verify a Firebase ID token issued to the mobile client

        Args:
            id_token: Raw bearer token

        Returns:
            CurrentUser built from the token claims

        Raises:
            InvalidTokenError: If the token is missing, invalid or has no UID
        """
        if not id_token:
            raise InvalidTokenError("Missing ID token")
        try:
            decoded = await self.firebase.verify_id_token(id_token)
        except Exception as e:
            logger.debug(f"Firebase ID token verification failed: {e}")
            raise InvalidTokenError(f"Firebase ID token verification failed: {e}") from e

        uid = decoded.get("uid") if decoded else None
        if not uid:
            raise InvalidTokenError("Firebase ID token missing UID")

        email = decoded.get("email")
        return CurrentUser(
            uid=uid,
            email=email,
            display_name=decoded.get("name") or (email.split("@")[0] if email else None),
        )

    async def get_account(self, user: CurrentUser) -> UserAccount:
        """Account document for the user, or a blank one if never saved"""
        account = await self.firebase.get_account(user.uid)
        if account is None:
            return UserAccount(
                uid=user.uid, email=user.email, display_name=user.display_name)
        return account

    async def choose_role(self, user: CurrentUser, role: Role) -> UserAccount:
        account = await self.get_account(user)
        updated = account.model_copy(update={"role": Role(role)})
        try:
            saved = await self.firebase.save_account(updated)
        except RemoteStoreError:
            logger.error(f"Could not save role {role} for {user.uid}")
            raise
        logger.info(f"User {user.uid} chose role {Role(role).value}")
        return saved


auth_service = AuthService()
