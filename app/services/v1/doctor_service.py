# app/services/v1/doctor_service.py
import re
from datetime import date as date_type

from app.generator import (
    GeneratedDoctor,
    AvailabilitySlot,
    synthesize_doctor,
    generate_available_slots,
    generate_doctor_list,
    is_valid_doctor_id,
    PROVINCES,
    CITIES_BY_PROVINCE,
    POSTAL_CODE_RANGES,
    SPECIALTIES,
)
from app.schemas import (
    DoctorSearchParams,
    DoctorSortField,
    SortOrder,
    ProvinceResponse,
    PostalCodeRange,
)
from common.api_error import DoctorNotFoundError, InvalidDateError
from common.logger import get_app_logger
from common.logger.logger_middleware import capture_timing, increment_counter

logger = get_app_logger(__name__)

_SLOT_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def validate_slot_date(value: str) -> str:
    """
    Check that ``value`` is a real calendar date written as YYYY-MM-DD.

    Returns the string unchanged so it can be embedded verbatim in slots.

    Raises:
        InvalidDateError: If the format or the date itself is invalid
    """
    if not _SLOT_DATE_PATTERN.fullmatch(value):
        raise InvalidDateError(value)
    try:
        date_type.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(value) from exc
    return value


def _sort_key(sort_by: DoctorSortField):
    if sort_by == DoctorSortField.NAME:
        return lambda d: (d.last_name.lower(), d.first_name.lower())
    if sort_by == DoctorSortField.PRICE:
        return lambda d: float(d.consultation_fee)
    if sort_by == DoctorSortField.REVIEWS:
        return lambda d: d.review_count
    return lambda d: float(d.rating)


def _matches(doctor: GeneratedDoctor, params: DoctorSearchParams) -> bool:
    if params.province and doctor.province != params.province:
        return False
    if params.specialty and doctor.specialty != params.specialty:
        return False
    if params.city and doctor.city != params.city:
        return False
    if params.q:
        needle = params.q.lower()
        haystack = (
            doctor.first_name,
            doctor.last_name,
            f"{doctor.first_name} {doctor.last_name}",
            doctor.specialty,
            doctor.city,
        )
        if not any(needle in field.lower() for field in haystack):
            return False
    return True


class DoctorService:
    """
    Request-facing wrapper around the synthetic doctor generator.

    Validates identifiers and dates at the boundary; the generator itself
    accepts any string.
    """

    def __init__(self, max_list_size: int):
        self.max_list_size = max_list_size

    def get_doctor(self, doctor_id: str) -> GeneratedDoctor:
        if not is_valid_doctor_id(doctor_id):
            logger.info("Rejected doctor id", doctor_id=doctor_id)
            raise DoctorNotFoundError(doctor_id)

        with capture_timing("generator"):
            doctor = synthesize_doctor(doctor_id)
        increment_counter("profiles")
        return doctor

    def get_available_slots(self, doctor_id: str, date: str) -> list[AvailabilitySlot]:
        if not is_valid_doctor_id(doctor_id):
            raise DoctorNotFoundError(doctor_id)
        validate_slot_date(date)

        with capture_timing("generator"):
            slots = generate_available_slots(doctor_id, date)
        increment_counter("slots", len(slots))

        logger.debug(
            "Slots generated",
            doctor_id=doctor_id,
            date=date,
            available=sum(1 for s in slots if s.available),
            total=len(slots),
        )
        return slots

    def search_doctors(self, params: DoctorSearchParams) -> list[GeneratedDoctor]:
        """
        Generate the roster for ``params.prefix``, then filter and sort it.

        ``count`` is clamped to max_list_size and counts generated profiles,
        so filters can return fewer entries than requested.
        """
        count = min(params.count, self.max_list_size)
        if count < params.count:
            logger.debug(
                "Roster size clamped", requested=params.count, allowed=count
            )

        with capture_timing("generator"):
            roster = generate_doctor_list(count, params.prefix)
        increment_counter("profiles", len(roster))

        matches = [doctor for doctor in roster if _matches(doctor, params)]
        return sorted(
            matches,
            key=_sort_key(params.sort_by),
            reverse=params.sort_order == SortOrder.DESC,
        )

    @staticmethod
    def list_provinces() -> list[ProvinceResponse]:
        return [
            ProvinceResponse(
                name=province,
                cities=list(CITIES_BY_PROVINCE[province]),
                postal_code_range=PostalCodeRange(
                    min=POSTAL_CODE_RANGES[province][0],
                    max=POSTAL_CODE_RANGES[province][1],
                ),
            )
            for province in PROVINCES
        ]

    @staticmethod
    def list_specialties() -> list[str]:
        return list(SPECIALTIES)


__all__ = ["DoctorService", "validate_slot_date"]
