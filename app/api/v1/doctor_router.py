# app/api/v1/doctor_router.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from app.api.deps import (
    get_app_config,
    get_doctor_service,
    ensure_not_in_maintenance,
    enforce_rate_limit,
)
from app.schemas import (
    DoctorResponse,
    DoctorSearchParams,
    DoctorSortField,
    SlotResponse,
    SortOrder,
)
from app.services.v1 import DoctorService
from common.config import AppConfig
from common.logger.logger_middleware import enable_perf_headers

doctor_router = APIRouter(
    prefix="/doctors",
    tags=["Doctors"],
    dependencies=[Depends(ensure_not_in_maintenance), Depends(enforce_rate_limit)],
)


@doctor_router.get(
    "",
    response_model=list[DoctorResponse],
    status_code=status.HTTP_200_OK,
    summary="Browse generated doctors",
    dependencies=[Depends(enable_perf_headers)],
    description="""
    Generates a roster of `count` synthetic doctors with ids
    `doctor-generated-<prefix>-<i>`, then applies the filters and sort.

    The same prefix always yields the same roster; a larger count only
    appends entries.
    """,
)
def list_doctors(
    count: Optional[int] = Query(
        None, ge=1, le=1000, description="Roster size before filtering"
    ),
    prefix: str = Query(
        "list", min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$"
    ),
    q: Optional[str] = Query(None, min_length=1, max_length=100),
    specialty: Optional[str] = Query(None, max_length=50),
    province: Optional[str] = Query(None, max_length=50),
    city: Optional[str] = Query(None, max_length=50),
    sort_by: DoctorSortField = Query(DoctorSortField.RATING, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
    service: DoctorService = Depends(get_doctor_service),
    config: AppConfig = Depends(get_app_config),
):
    params = DoctorSearchParams(
        count=count or config.api.default_list_size,
        prefix=prefix,
        q=q,
        specialty=specialty,
        province=province,
        city=city,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return service.search_doctors(params)


@doctor_router.get(
    "/{doctor_id}",
    response_model=DoctorResponse,
    status_code=status.HTTP_200_OK,
    summary="Get doctor profile",
    description="""
    Synthesizes the full profile for a doctor id of the form `doctor-<slug>`.

    Nothing is stored: the profile is recomputed from the id on every call
    and is identical across calls and restarts.
    """,
    responses={
        404: {"description": "Id does not match doctor-[a-z0-9-]+"},
    },
)
def get_doctor(
    doctor_id: str,
    service: DoctorService = Depends(get_doctor_service),
):
    return service.get_doctor(doctor_id)


@doctor_router.get(
    "/{doctor_id}/slots",
    response_model=list[SlotResponse],
    status_code=status.HTTP_200_OK,
    summary="Get a day's availability",
    description="Half-hour slots from 09:00 to 16:00, about 80% available.",
    responses={
        400: {"description": "Date is not a valid YYYY-MM-DD calendar date"},
        404: {"description": "Id does not match doctor-[a-z0-9-]+"},
    },
)
def get_doctor_slots(
    doctor_id: str,
    date: str = Query(..., description="YYYY-MM-DD", examples=["2024-06-01"]),
    service: DoctorService = Depends(get_doctor_service),
):
    return service.get_available_slots(doctor_id, date)


__all__ = ["doctor_router"]
