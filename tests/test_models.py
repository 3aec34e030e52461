from datetime import datetime, UTC

import pytest
from pydantic import TypeAdapter, ValidationError

from conftest import make_student, make_teacher
from tutorhub.listings.contact import dial_url
from tutorhub.models.listing import (
    ListingRecord,
    Role,
    StudentListing,
    TeacherListing,
    firestore_listing_to_model,
    listing_model_to_firestore,
)
from tutorhub.models.user import (
    UserAccount,
    account_model_to_firestore,
    firestore_account_to_model,
)


def test_teacher_document_conversion():
    created = datetime(2024, 5, 1, 10, 0, tzinfo=UTC)
    doc = {
        "name": "Sita",
        "subject": "Maths",
        "phoneNumber": 9800000000,
        "province": "Gandaki Province",
        "district": "Kaski",
        "userId": "uid_1",
        "experience": "4",
        "createdAt": created,
        "completedAt": "",
    }
    listing = firestore_listing_to_model(doc, "doc1", Role.TEACHER)

    assert isinstance(listing, TeacherListing)
    assert listing.role == "teacher"
    assert listing.id == "doc1"
    assert listing.phone_number == "9800000000"
    assert listing.experience == 4
    assert listing.photo_url == ""
    assert listing.specific_location == ""
    assert listing.created_at_seconds == int(created.timestamp())


def test_student_document_with_legacy_keys():
    doc = {
        "name": "Ram",
        "subject": "Science",
        "phoneNumber": "98",
        "ownerId": "uid_2",
        "class": "9",
        "hoursToTeach": "2",
        "salary": "not sure",
    }
    listing = firestore_listing_to_model(doc, "doc2", "student")

    assert isinstance(listing, StudentListing)
    assert listing.owner_id == "uid_2"
    assert listing.grade == "9"
    assert listing.teaching_hours == 2.0
    assert listing.salary is None
    assert listing.created_at is None
    assert listing.created_at_seconds == 0


def test_naive_timestamps_are_treated_as_utc():
    listing = make_teacher(created_at=datetime(1970, 1, 1, 0, 1, 40))
    assert listing.created_at_seconds == 100


def test_listing_round_trips_through_firestore_document():
    student = make_student(salary=5000.0, teaching_hours=1.5, photo_url="https://p")
    doc = listing_model_to_firestore(student)
    assert "role" not in doc and "id" not in doc
    assert doc["userId"] == student.owner_id
    assert firestore_listing_to_model(doc, student.id, Role.STUDENT) == student


def test_record_union_is_tagged_by_role():
    adapter = TypeAdapter(ListingRecord)
    teacher = adapter.validate_python({
        "role": "teacher", "id": "1", "ownerId": "u", "name": "n",
        "subject": "s", "phoneNumber": "p", "experience": 2,
    })
    student = adapter.validate_python({
        "role": "student", "id": "2", "ownerId": "u", "name": "n",
        "subject": "s", "phoneNumber": "p", "grade": "5",
    })
    assert isinstance(teacher, TeacherListing)
    assert isinstance(student, StudentListing)
    with pytest.raises(ValidationError):
        adapter.validate_python({"role": "parent", "id": "3"})


def test_listings_are_immutable_and_serialize_camel_case():
    teacher = make_teacher()
    with pytest.raises(ValidationError):
        teacher.name = "changed"
    dumped = teacher.model_dump(by_alias=True)
    assert dumped["phoneNumber"] == teacher.phone_number
    assert dumped["ownerId"] == teacher.owner_id
    assert dumped["photoURL"] == ""


def test_negative_experience_rejected():
    with pytest.raises(ValidationError):
        make_teacher(experience=-1)
    doc = {"name": "n", "subject": "s", "phoneNumber": "p", "experience": -3}
    assert firestore_listing_to_model(doc, "x", Role.TEACHER).experience == 0


def test_role_counterpart():
    assert Role.TEACHER.counterpart is Role.STUDENT
    assert Role.STUDENT.counterpart is Role.TEACHER


def test_dial_url():
    assert dial_url(" 9800000000 ") == "tel:9800000000"
    assert dial_url(9800000000) == "tel:9800000000"
    with pytest.raises(ValueError):
        dial_url("  ")


def test_account_conversion():
    account = firestore_account_to_model(
        {"email": "a@b.c", "displayName": "A", "role": "teacher"}, "uid_9")
    assert account.role is Role.TEACHER
    data = account_model_to_firestore(account)
    assert data["role"] == "teacher"
    assert data["displayName"] == "A"
    assert "uid" not in data

    blank = UserAccount(uid="u")
    assert account_model_to_firestore(blank)["role"] is None


def test_non_finite_stored_numbers_read_back_as_none():
    doc = {"name": "Ram", "subject": "Science", "phoneNumber": "98",
           "userId": "uid_3", "salary": "nan", "teachingHours": float("inf")}
    listing = firestore_listing_to_model(doc, "doc3", Role.STUDENT)
    assert listing.salary is None
    assert listing.teaching_hours is None
