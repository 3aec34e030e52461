"""
Registration form drafts for teacher and student listings

Fields hold the raw text the user typed. ``validate_form`` reports field-level
errors without touching the network; ``to_firestore`` builds the document
written to the role's collection.
"""

import math
from abc import abstractmethod
from typing import ClassVar, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict

from tutorhub.listings.locations import DEFAULT_LOOKUP, LocationLookup
from tutorhub.models.listing import Role


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _parse_number(value: Optional[str]) -> Optional[float]:
    if _blank(value):
        return None
    number = float(str(value).strip())
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


class ListingForm(BaseModel):
    """Fields shared by both registration screens"""

    role: Role
    name: str = ""
    subject: str = ""
    phone_number: str = Field(default="", alias="phoneNumber")
    province: str = ""
    district: str = ""
    specific_location: str = Field(default="", alias="specificLocation")

    model_config = ConfigDict(populate_by_name=True)

    required_fields: ClassVar[Tuple[str, ...]] = ("name", "subject", "phone_number")

    def validate_form(self, lookup: LocationLookup = DEFAULT_LOOKUP) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for field_name in self.required_fields:
            if _blank(getattr(self, field_name)):
                label = type(self).model_fields[field_name].alias or field_name
                errors[label] = f"{_LABELS.get(field_name, field_name)} is required"

        if _blank(self.province):
            errors["province"] = "Province is required"
        elif not lookup.has_province(self.province):
            errors["province"] = "Unknown province"

        if _blank(self.district):
            errors["district"] = "District is required"
        elif "province" not in errors and not lookup.contains(self.province, self.district):
            errors["district"] = f"{self.district} is not in {self.province}"

        errors.update(self._extra_errors())
        return errors

    def _extra_errors(self) -> Dict[str, str]:
        return {}

    def _common_document(self, owner_id: str, photo_url: str) -> dict:
        return {
            "name": self.name.strip(),
            "subject": self.subject.strip(),
            "phoneNumber": self.phone_number.strip(),
            "photoURL": photo_url or "",
            "province": self.province,
            "district": self.district,
            "specificLocation": self.specific_location.strip(),
            "userId": owner_id,
        }

    @abstractmethod
    def to_firestore(self, owner_id: str, photo_url: str = "") -> dict:
        ...


_LABELS = {
    "name": "Name",
    "subject": "Subject",
    "phone_number": "Phone number",
    "experience": "Experience",
    "grade": "Grade",
}


class TeacherForm(ListingForm):
    role: Role = Role.TEACHER
    experience: str = ""

    required_fields: ClassVar[Tuple[str, ...]] = ("name", "experience", "subject", "phone_number")

    def _extra_errors(self) -> Dict[str, str]:
        if _blank(self.experience):
            return {}
        text = self.experience.strip()
        digits = text[1:] if text.startswith("-") else text
        # whole ASCII years only
        if not (digits.isascii() and digits.isdigit()):
            return {"experience": "Experience must be a number"}
        if text.startswith("-") and int(digits) > 0:
            return {"experience": "Experience cannot be negative"}
        return {}

    def to_firestore(self, owner_id: str, photo_url: str = "") -> dict:
        data = self._common_document(owner_id, photo_url)
        data["experience"] = int(self.experience.strip())
        return data


class StudentForm(ListingForm):
    role: Role = Role.STUDENT
    grade: str = ""
    salary: str = ""
    teaching_hours: str = Field(default="", alias="teachingHours")

    required_fields: ClassVar[Tuple[str, ...]] = ("name", "grade", "subject", "phone_number")

    def _extra_errors(self) -> Dict[str, str]:
        errors = {}
        for field_name, alias, label in (
            ("salary", "salary", "Salary"),
            ("teaching_hours", "teachingHours", "Teaching hours"),
        ):
            try:
                value = _parse_number(getattr(self, field_name))
            except ValueError:
                errors[alias] = f"{label} must be a number"
                continue
            if value is not None and value < 0:
                errors[alias] = f"{label} cannot be negative"
        return errors

    def to_firestore(self, owner_id: str, photo_url: str = "") -> dict:
        data = self._common_document(owner_id, photo_url)
        data["grade"] = self.grade.strip()
        data["salary"] = _parse_number(self.salary)
        data["teachingHours"] = _parse_number(self.teaching_hours)
        return data


def form_for(role: Role, data: dict) -> ListingForm:
    if Role(role) is Role.TEACHER:
        return TeacherForm.model_validate(data)
    return StudentForm.model_validate(data)
