# app/schemas/doctor_schema.py
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DoctorResponse(BaseModel):
    """Synthetic doctor profile, serialized with camelCase field names."""

    model_config = ConfigDict(
        from_attributes=True,  # Reads GeneratedDoctor dataclasses
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    user_id: str
    first_name: str
    last_name: str
    specialty: str
    hpcsa_number: str = Field(..., description="Registration number, MP + 6 digits")
    phone: str
    province: str
    city: str
    zip_code: str
    practice_address: str
    is_verified: bool
    rating: str = Field(..., description="One decimal place, 4.0 to 5.0")
    review_count: int = Field(..., ge=15, le=250)
    consultation_fee: str = Field(..., description="Rand amount with .00 suffix")


class DoctorSortField(str, Enum):
    RATING = "rating"
    NAME = "name"
    PRICE = "price"
    REVIEWS = "reviews"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DoctorSearchParams(BaseModel):
    """Browse/search request for the generated roster."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(20, ge=1, description="Roster size before filtering")
    # Restricted so every generated id passes is_valid_doctor_id()
    prefix: str = Field("list", min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    q: Optional[str] = Field(None, min_length=1, max_length=100)
    specialty: Optional[str] = Field(None, max_length=50)
    province: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=50)
    sort_by: DoctorSortField = DoctorSortField.RATING
    sort_order: SortOrder = SortOrder.DESC


__all__ = [
    "DoctorResponse",
    "DoctorSearchParams",
    "DoctorSortField",
    "SortOrder",
]
