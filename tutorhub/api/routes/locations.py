"""
Province/district lookup for the registration dropdowns and the district filter
"""

from fastapi import APIRouter, Depends, HTTPException

from tutorhub.dependencies import get_location_lookup
from tutorhub.listings.locations import LocationLookup
from tutorhub.schemas.location import DistrictListResponse, ProvinceListResponse

router = APIRouter(prefix="/api/v1/locations", tags=["locations"])


@router.get("", response_model=ProvinceListResponse)
async def list_provinces(lookup: LocationLookup = Depends(get_location_lookup)):
    return ProvinceListResponse(provinces=list(lookup.provinces()))


@router.get("/{province}/districts", response_model=DistrictListResponse)
async def list_districts(
    province: str, lookup: LocationLookup = Depends(get_location_lookup)
):
    if not lookup.has_province(province):
        raise HTTPException(status_code=404, detail="Province not found")
    return DistrictListResponse(
        province=province, districts=list(lookup.districts(province)))
