"""
Province and district lookup used by the registration forms and the
district filter.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from tutorhub.exceptions import InvalidLocationError


NEPAL_DISTRICTS: Dict[str, Tuple[str, ...]] = {
    "Province 1": (
        "Bhojpur", "Dhankuta", "Ilam", "Jhapa", "Khotang", "Morang",
        "Okhaldhunga", "Panchthar", "Sankhuwasabha", "Solukhumbu", "Sunsari",
        "Taplejung", "Terhathum", "Udayapur",
    ),
    "Madhesh Province": (
        "Bara", "Dhanusha", "Mahottari", "Parsa", "Rautahat", "Saptari",
        "Sarlahi", "Siraha",
    ),
    "Bagmati Province": (
        "Bhaktapur", "Chitwan", "Dhading", "Dolakha", "Kathmandu",
        "Kavrepalanchok", "Lalitpur", "Makwanpur", "Nuwakot", "Ramechhap",
        "Rasuwa", "Sindhuli", "Sindhupalchok",
    ),
    "Gandaki Province": (
        "Baglung", "Gorkha", "Kaski", "Lamjung", "Manang", "Mustang",
        "Myagdi", "Nawalpur", "Parbat", "Syangja", "Tanahun",
    ),
    "Lumbini Province": (
        "Arghakhanchi", "Banke", "Bardiya", "Dang", "Gulmi", "Kapilvastu",
        "Nawalparasi", "Palpa", "Pyuthan", "Rolpa", "Rukum (East)",
        "Rupandehi",
    ),
    "Karnali Province": (
        "Dailekh", "Dolpa", "Humla", "Jajarkot", "Jumla", "Kalikot", "Mugu",
        "Rukum (West)", "Salyan", "Surkhet",
    ),
    "Sudurpashchim Province": (
        "Achham", "Baitadi", "Bajhang", "Bajura", "Dadeldhura", "Darchula",
        "Doti", "Kailali", "Kanchanpur",
    ),
}


class LocationLookup:
    """Read-only province -> districts table"""

    def __init__(self, table: Mapping[str, Iterable[str]]):
        self._table = MappingProxyType(
            {province: tuple(districts) for province, districts in table.items()}
        )

    def provinces(self) -> Tuple[str, ...]:
        return tuple(self._table)

    def districts(self, province: Optional[str]) -> Tuple[str, ...]:
        if not province:
            return ()
        return self._table.get(province, ())

    def has_province(self, province: Optional[str]) -> bool:
        return bool(province) and province in self._table

    def contains(self, province: Optional[str], district: Optional[str]) -> bool:
        return bool(district) and district in self.districts(province)


DEFAULT_LOOKUP = LocationLookup(NEPAL_DISTRICTS)


class LocationSelection:
    """
    Cascading province -> district picker.

    States: no province, province without district, province with district.
    Choosing a province drops a district that is not listed under it, so the
    selection is never left pointing at a district of another province.
    """

    def __init__(self, lookup: LocationLookup = DEFAULT_LOOKUP,
                 province: str = "", district: str = ""):
        self.lookup = lookup
        self.province = ""
        self.district = ""
        if province:
            self.select_province(province)
        if district:
            self.select_district(district)

    @property
    def district_options(self) -> Tuple[str, ...]:
        return self.lookup.districts(self.province)

    def select_province(self, province: Optional[str]) -> None:
        province = province or ""
        if province and not self.lookup.has_province(province):
            raise InvalidLocationError(f"Unknown province: {province}")
        self.province = province
        if self.district not in self.district_options:
            self.district = ""

    def select_district(self, district: Optional[str]) -> None:
        district = district or ""
        if district and district not in self.district_options:
            raise InvalidLocationError(
                f"{district} is not a district of {self.province or 'an unselected province'}"
            )
        self.district = district

    def clear(self) -> None:
        self.province = ""
        self.district = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.province and self.district)

    def errors(self) -> Dict[str, str]:
        errors = {}
        if not self.province:
            errors["province"] = "Province is required"
        if not self.district:
            errors["district"] = "District is required"
        return errors
