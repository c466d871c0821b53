# app/api/v1/reference_router.py
from fastapi import APIRouter, Depends
from app.api.deps import ensure_not_in_maintenance, enforce_rate_limit
from app.schemas import ProvinceResponse
from app.services.v1 import DoctorService

reference_router = APIRouter(
    prefix="/reference",
    tags=["Reference data"],
    dependencies=[Depends(ensure_not_in_maintenance), Depends(enforce_rate_limit)],
)


@reference_router.get(
    "/provinces",
    response_model=list[ProvinceResponse],
    summary="Provinces with their cities and postal code ranges",
)
def list_provinces():
    return DoctorService.list_provinces()


@reference_router.get(
    "/specialties",
    response_model=list[str],
    summary="Medical specialties used by generated doctors",
)
def list_specialties():
    return DoctorService.list_specialties()


__all__ = ["reference_router"]
