from datetime import datetime, UTC
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from tutorhub.exceptions import MediaUploadError, RemoteStoreError
from tutorhub.listings.submission import ListingSubmitter
from tutorhub.models.listing import Role, StudentListing, TeacherListing
from tutorhub.models.user import CurrentUser


def at(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=UTC)


def make_teacher(id="t1", district="Kaski", created=None, **kwargs) -> TeacherListing:
    data = dict(
        id=id,
        owner_id=kwargs.pop("owner_id", "owner_t"),
        name=kwargs.pop("name", f"Teacher {id}"),
        subject=kwargs.pop("subject", "Mathematics"),
        phone_number=kwargs.pop("phone_number", "9800000001"),
        province=kwargs.pop("province", "Gandaki Province"),
        district=district,
        created_at=at(created) if created is not None else None,
        experience=kwargs.pop("experience", 3),
    )
    data.update(kwargs)
    return TeacherListing(**data)


def make_student(id="s1", district="Lalitpur", created=None, **kwargs) -> StudentListing:
    data = dict(
        id=id,
        owner_id=kwargs.pop("owner_id", "owner_s"),
        name=kwargs.pop("name", f"Student {id}"),
        subject=kwargs.pop("subject", "Science"),
        phone_number=kwargs.pop("phone_number", "9800000002"),
        province=kwargs.pop("province", "Bagmati Province"),
        district=district,
        created_at=at(created) if created is not None else None,
        grade=kwargs.pop("grade", "8"),
    )
    data.update(kwargs)
    return StudentListing(**data)


class FakeListingStore:
    """In-memory stand-in for the Firestore listing collections"""

    def __init__(self):
        self.collections = {Role.TEACHER: [], Role.STUDENT: []}
        self.fail_reads = False
        self.fail_writes = False
        self.fetch_all_calls = 0
        self.created: List[tuple] = []

    def add(self, *listings):
        for listing in listings:
            self.collections[Role(listing.role)].append(listing)

    async def fetch_all(self, role):
        self.fetch_all_calls += 1
        if self.fail_reads:
            raise RemoteStoreError("firestore unavailable")
        return list(self.collections[Role(role)])

    async def fetch_by_owner(self, role, owner_id):
        if self.fail_reads:
            raise RemoteStoreError("firestore unavailable")
        return [l for l in self.collections[Role(role)] if l.owner_id == owner_id]

    async def fetch_by_district(self, role, district):
        if self.fail_reads:
            raise RemoteStoreError("firestore unavailable")
        return [l for l in self.collections[Role(role)] if l.district == district]

    async def get_listing(self, role, listing_id) -> Optional[object]:
        if self.fail_reads:
            raise RemoteStoreError("firestore unavailable")
        for listing in self.collections[Role(role)]:
            if listing.id == listing_id:
                return listing
        return None

    async def create_listing(self, role, data):
        if self.fail_writes:
            raise RemoteStoreError("write rejected")
        role = Role(role)
        self.created.append((role, dict(data)))
        common = dict(
            id=f"new{len(self.created)}",
            owner_id=data["userId"],
            name=data["name"],
            subject=data["subject"],
            phone_number=data["phoneNumber"],
            specific_location=data["specificLocation"],
            province=data["province"],
            district=data["district"],
            photo_url=data["photoURL"],
            created_at=at(1_700_000_000),
        )
        if role is Role.TEACHER:
            listing = TeacherListing(experience=data["experience"], **common)
        else:
            listing = StudentListing(
                grade=data["grade"],
                salary=data["salary"],
                teaching_hours=data["teachingHours"],
                **common,
            )
        self.collections[role].append(listing)
        return listing


class FakeUploader:
    def __init__(self, url="https://res.cloudinary.com/demo/image/upload/p.jpg", fail=False):
        self.url = url
        self.fail = fail
        self.calls = []

    async def upload(self, content, filename, content_type):
        self.calls.append((content, filename, content_type))
        if self.fail:
            raise MediaUploadError("Upload failed with status 400")
        return self.url


@pytest.fixture
def fake_store():
    return FakeListingStore()


@pytest.fixture
def fake_uploader():
    return FakeUploader()


@pytest.fixture
def current_user():
    return CurrentUser(uid="user_1", display_name="Sita", email="sita@example.com")


@pytest.fixture
def api_client(fake_store, fake_uploader, current_user):
    """TestClient with Firestore, Cloudinary and auth replaced by fakes"""
    from tutorhub.main import app
    from tutorhub.dependencies import (
        get_current_user,
        get_listing_reader,
        get_listing_submitter,
    )

    app.dependency_overrides[get_listing_reader] = lambda: fake_store
    app.dependency_overrides[get_listing_submitter] = lambda: ListingSubmitter(
        fake_store, fake_uploader)
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides = {}
