"""
Firebase service for Firestore and Authentication operations
"""

from __future__ import annotations
import asyncio
import json
import logging
import os
from datetime import datetime, UTC
from typing import Optional, Dict, Any, List

import firebase_admin
from firebase_admin import credentials, firestore, auth as firebase_auth
from google.cloud.firestore_v1.base_query import FieldFilter

from tutorhub.config import settings
from tutorhub.exceptions import RemoteStoreError
from tutorhub.models.listing import ListingRecord, Role, firestore_listing_to_model
from tutorhub.models.user import (
    UserAccount,
    account_model_to_firestore,
    firestore_account_to_model,
)

logger = logging.getLogger(__name__)


def collection_for(role: Role) -> str:
    """Firestore collection holding the listings of one role"""
    if Role(role) is Role.TEACHER:
        return settings.TEACHER_COLLECTION
    return settings.STUDENT_COLLECTION


class FirebaseService:
    """Service for Firebase operations"""

    _instance = None
    _initialized = False

    def __new__(cls):
        """Singleton pattern to ensure only one Firebase instance"""
        if cls._instance is None:
            cls._instance = super(FirebaseService, cls).__new__(cls)
        return cls._instance

    _db = None

    @property
    def db(self):
        """Firestore client, created on first use"""
        if self._db is None:
            self._ensure_app()
            self._db = firestore.client()
        return self._db

    def _ensure_app(self):
        if not FirebaseService._initialized:
            self._initialize_firebase()
            FirebaseService._initialized = True

    def _initialize_firebase(self):
        """Initialize Firebase Admin SDK with credentials"""
        try:
            # Check if already initialized
            firebase_admin.get_app()
            logger.info("Firebase already initialized")
        except ValueError:
            options = {}
            if settings.FIREBASE_PROJECT_ID:
                options["projectId"] = settings.FIREBASE_PROJECT_ID

            if settings.DEV_MODE and settings.FIREBASE_EMULATOR_HOST:
                # Use emulator for development
                os.environ["FIRESTORE_EMULATOR_HOST"] = settings.FIREBASE_EMULATOR_HOST
                firebase_admin.initialize_app(options=options or None)
                logger.info(
                    f"Firebase initialized with emulator: {settings.FIREBASE_EMULATOR_HOST}")
                return

            if settings.FIREBASE_CREDENTIALS_JSON:
                try:
                    cred = credentials.Certificate(
                        json.loads(settings.FIREBASE_CREDENTIALS_JSON))
                except json.JSONDecodeError as e:
                    logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")
                    raise
                logger.info(
                    "Firebase initialized with credentials from FIREBASE_CREDENTIALS_JSON")
            else:
                # Fallback to file path
                cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
                logger.info(
                    f"Firebase initialized with credentials from {settings.FIREBASE_CREDENTIALS_PATH}")

            firebase_admin.initialize_app(cred, options or None)
            logger.info("Firebase Admin SDK initialization successful.")

    # ============================================
    # LISTING OPERATIONS
    # ============================================

    async def fetch_all(self, role: Role) -> List[ListingRecord]:
        """Every listing of one role, in the store's default order"""
        docs = await self.query_collection(collection_for(role))
        return self._to_listings(docs, role)

    async def fetch_by_owner(self, role: Role, owner_id: str) -> List[ListingRecord]:
        docs = await self.query_collection(
            collection_for(role), filters=[("userId", "==", owner_id)])
        return self._to_listings(docs, role)

    async def fetch_by_district(self, role: Role, district: str) -> List[ListingRecord]:
        docs = await self.query_collection(
            collection_for(role), filters=[("district", "==", district)])
        return self._to_listings(docs, role)

    async def get_listing(self, role: Role, listing_id: str) -> Optional[ListingRecord]:
        try:
            doc_ref = self.db.collection(collection_for(role)).document(listing_id)
            doc = await asyncio.to_thread(doc_ref.get)
        except Exception as e:
            raise RemoteStoreError(f"Error getting listing {listing_id}: {e}") from e
        if not doc.exists:
            return None
        return firestore_listing_to_model(doc.to_dict(), doc.id, role)

    async def create_listing(self, role: Role, data: Dict[str, Any]) -> ListingRecord:
        """
        Add a listing document. Firestore assigns the id and createdAt.

        Args:
            role: Collection to write into
            data: Firestore payload built from a validated form

        Returns:
            The stored listing, read back with its server timestamp
        """
        payload = dict(data)
        payload.pop("id", None)
        payload["createdAt"] = firestore.SERVER_TIMESTAMP

        def _create():
            doc_ref = self.db.collection(collection_for(role)).document()
            doc_ref.set(payload)
            return doc_ref.get()

        try:
            doc = await asyncio.to_thread(_create)
        except Exception as e:
            raise RemoteStoreError(f"Error creating listing: {e}") from e
        return firestore_listing_to_model(doc.to_dict(), doc.id, role)

    def _to_listings(self, docs: List[tuple], role: Role) -> List[ListingRecord]:
        listings = []
        for doc_id, doc in docs:
            try:
                listings.append(firestore_listing_to_model(doc, doc_id, role))
            except ValueError as e:
                logger.warning(f"Skipping malformed {Role(role).value} listing {doc_id}: {e}")
        return listings

    # ============================================
    # ACCOUNT OPERATIONS
    # ============================================

    async def get_account(self, uid: str) -> Optional[UserAccount]:
        try:
            doc = await asyncio.to_thread(
                self.db.collection(settings.USER_COLLECTION).document(uid).get)
        except Exception as e:
            raise RemoteStoreError(f"Error getting user account: {e}") from e
        if doc.exists:
            return firestore_account_to_model(doc.to_dict(), uid)
        return None

    async def save_account(self, account: UserAccount) -> UserAccount:
        account = account.model_copy(update={"updated_at": datetime.now(UTC)})
        doc_ref = self.db.collection(settings.USER_COLLECTION).document(account.uid)
        try:
            await asyncio.to_thread(
                doc_ref.set, account_model_to_firestore(account), merge=True)
        except Exception as e:
            raise RemoteStoreError(f"Error saving user account: {e}") from e
        return account

    async def verify_id_token(self, id_token: str) -> Dict[str, Any]:
        """
        Verify Firebase ID token

        Args:
            id_token: Firebase ID token to verify

        Returns:
            Decoded token claims
        """
        self._ensure_app()
        return await asyncio.to_thread(firebase_auth.verify_id_token, id_token)

    # ============================================
    # GENERIC QUERY OPERATIONS
    # ============================================
    async def query_collection(
        self, collection_name: str, filters: Optional[List[tuple]] = None
    ) -> List[tuple[str, Dict[str, Any]]]:
        """
        Streams a Firestore collection, narrowed by (field, op, value) filters.

        Returns:
            A list of (document_id, document_data) tuples.

        Raises:
            RemoteStoreError: the query could not be executed.
        """
        def _run():
            query = self.db.collection(collection_name)
            for field, op, value in filters or []:
                query = query.where(filter=FieldFilter(field, op, value))
            return [(doc.id, doc.to_dict()) for doc in query.stream()]

        try:
            return await asyncio.to_thread(_run)
        except Exception as e:
            raise RemoteStoreError(
                f"Error querying {collection_name}: {e}") from e


# Global Firebase service instance
firebase_service = FirebaseService()
