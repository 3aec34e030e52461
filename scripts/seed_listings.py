import asyncio
import random
import sys

# Import necessary models and services from your application
from tutorhub.config import settings
from tutorhub.exceptions import FormValidationError, SubmissionError
from tutorhub.listings.forms import StudentForm, TeacherForm
from tutorhub.listings.locations import DEFAULT_LOOKUP
from tutorhub.listings.submission import ListingSubmitter
from tutorhub.logging_config import configure_logging
from tutorhub.services.firebase_service import firebase_service

# --- Configuration for seeding ---
NUM_LISTINGS_PER_ROLE = 5
SEED_OWNER_ID = "seed-script"

FIRST_NAMES = ["Sita", "Ram", "Gita", "Hari", "Anita", "Bikash", "Sunita", "Ramesh"]
LAST_NAMES = ["Sharma", "Thapa", "Gurung", "Shrestha", "Rai", "Adhikari"]
SUBJECTS = ["Mathematics", "Science", "English", "Nepali", "Accountancy", "Physics"]


def random_location():
    province = random.choice(DEFAULT_LOOKUP.provinces())
    return province, random.choice(DEFAULT_LOOKUP.districts(province))


def random_name():
    return f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"


def generate_teacher_form() -> TeacherForm:
    province, district = random_location()
    return TeacherForm(
        name=random_name(),
        experience=str(random.randint(0, 20)),
        subject=random.choice(SUBJECTS),
        phone_number=f"98{random.randint(10000000, 99999999)}",
        province=province,
        district=district,
    )


def generate_student_form() -> StudentForm:
    province, district = random_location()
    return StudentForm(
        name=random_name(),
        grade=str(random.randint(1, 12)),
        subject=random.choice(SUBJECTS),
        phone_number=f"98{random.randint(10000000, 99999999)}",
        province=province,
        district=district,
        salary=str(random.choice([5000, 8000, 10000, 15000])),
        teaching_hours=str(random.choice([1, 1.5, 2])),
    )


async def seed_listings() -> int:
    """Seeds both listing collections through the normal submission path."""
    submitter = ListingSubmitter(firebase_service)
    failures = 0
    for factory in (generate_teacher_form, generate_student_form):
        for _ in range(NUM_LISTINGS_PER_ROLE):
            form = factory()
            try:
                listing = await submitter.submit(form, SEED_OWNER_ID)
                print(f"Created {form.role.value} {listing.name} in {listing.district} ({listing.id})")
            except (FormValidationError, SubmissionError) as e:
                failures += 1
                print(f"Error creating {form.role.value} {form.name}: {e}")
    return failures


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    print(f"--- Seeding {NUM_LISTINGS_PER_ROLE} listings per role ---")
    failed = asyncio.run(seed_listings())
    print("--- Listing seeding complete ---")
    sys.exit(1 if failed else 0)
