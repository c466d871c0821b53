# app/schemas/reference_schema.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PostalCodeRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    max: int


class ProvinceResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: str
    cities: list[str]
    postal_code_range: PostalCodeRange = Field(..., description="Inclusive bounds")


__all__ = ["ProvinceResponse", "PostalCodeRange"]
