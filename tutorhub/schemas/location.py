"""
Schemas for the province/district lookup
"""

from pydantic import BaseModel
from typing import List


class ProvinceListResponse(BaseModel):
    provinces: List[str]


class DistrictListResponse(BaseModel):
    province: str
    districts: List[str]
