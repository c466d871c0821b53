"""DoctorService: boundary validation, roster search and reference data."""

import pytest

from app.generator import CITIES_BY_PROVINCE, PROVINCES, SPECIALTIES, synthesize_doctor
from app.schemas import DoctorSearchParams, DoctorSortField, SortOrder
from app.services.v1 import DoctorService, validate_slot_date
from common.api_error import DoctorNotFoundError, InvalidDateError


@pytest.fixture
def service():
    return DoctorService(max_list_size=50)


class TestValidateSlotDate:
    @pytest.mark.parametrize("value", ["2024-06-01", "2024-02-29", "1999-12-31"])
    def test_valid(self, value):
        assert validate_slot_date(value) == value

    @pytest.mark.parametrize(
        "value",
        ["2023-02-29", "2024-13-01", "2024-6-1", "20240601", "2024-06-01T00:00", "", "tomorrow"],
    )
    def test_invalid(self, value):
        with pytest.raises(InvalidDateError) as exc_info:
            validate_slot_date(value)
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "INVALID_DATE"


class TestGetDoctor:
    def test_returns_synthesized_profile(self, service):
        assert service.get_doctor("doctor-test-1") == synthesize_doctor("doctor-test-1")

    @pytest.mark.parametrize("doctor_id", ["doctor-", "patient-1", "doctor-ABC"])
    def test_invalid_id_is_not_found(self, service, doctor_id):
        with pytest.raises(DoctorNotFoundError) as exc_info:
            service.get_doctor(doctor_id)
        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "DOCTOR_NOT_FOUND"


class TestGetAvailableSlots:
    def test_returns_grid(self, service):
        slots = service.get_available_slots("doctor-test-1", "2024-06-01")
        assert len(slots) == 15

    def test_invalid_id_checked_before_date(self, service):
        with pytest.raises(DoctorNotFoundError):
            service.get_available_slots("nobody", "not-a-date")

    def test_invalid_date(self, service):
        with pytest.raises(InvalidDateError):
            service.get_available_slots("doctor-test-1", "2024-02-30")


class TestSearchDoctors:
    def test_default_sort_is_rating_descending(self, service):
        roster = service.search_doctors(DoctorSearchParams(count=30))
        ratings = [float(d.rating) for d in roster]
        assert len(roster) == 30
        assert ratings == sorted(ratings, reverse=True)

    def test_count_is_clamped(self, service):
        assert len(service.search_doctors(DoctorSearchParams(count=500))) == 50

    def test_prefix_selects_roster(self, service):
        roster = service.search_doctors(DoctorSearchParams(count=5, prefix="home"))
        assert {d.id for d in roster} == {
            f"doctor-generated-home-{i}" for i in range(1, 6)
        }

    def test_province_filter(self, service):
        province = PROVINCES[0]
        roster = service.search_doctors(
            DoctorSearchParams(count=50, province=province)
        )
        assert all(d.province == province for d in roster)

    def test_city_filter(self, service):
        everyone = service.search_doctors(DoctorSearchParams(count=50))
        city = everyone[0].city
        roster = service.search_doctors(DoctorSearchParams(count=50, city=city))
        assert roster
        assert all(d.city == city for d in roster)
        assert city in CITIES_BY_PROVINCE[roster[0].province]

    def test_specialty_filter(self, service):
        everyone = service.search_doctors(DoctorSearchParams(count=50))
        specialty = everyone[-1].specialty
        roster = service.search_doctors(
            DoctorSearchParams(count=50, specialty=specialty)
        )
        assert roster
        assert all(d.specialty == specialty for d in roster)

    def test_unknown_filter_value_gives_empty_list(self, service):
        assert service.search_doctors(DoctorSearchParams(province="Atlantis")) == []

    def test_query_is_case_insensitive(self, service):
        everyone = service.search_doctors(DoctorSearchParams(count=50))
        target = everyone[0]
        roster = service.search_doctors(
            DoctorSearchParams(count=50, q=target.last_name.upper())
        )
        assert target in roster
        for doctor in roster:
            fields = f"{doctor.first_name} {doctor.last_name} {doctor.specialty} {doctor.city}"
            assert target.last_name.lower() in fields.lower()

    def test_query_matches_full_name(self, service):
        target = service.search_doctors(DoctorSearchParams(count=10))[0]
        roster = service.search_doctors(
            DoctorSearchParams(count=10, q=f"{target.first_name} {target.last_name}")
        )
        assert target in roster

    @pytest.mark.parametrize(
        "sort_by,key",
        [
            (DoctorSortField.PRICE, lambda d: float(d.consultation_fee)),
            (DoctorSortField.REVIEWS, lambda d: d.review_count),
            (DoctorSortField.RATING, lambda d: float(d.rating)),
            (DoctorSortField.NAME, lambda d: (d.last_name.lower(), d.first_name.lower())),
        ],
    )
    def test_ascending_sort(self, service, sort_by, key):
        roster = service.search_doctors(
            DoctorSearchParams(count=40, sort_by=sort_by, sort_order=SortOrder.ASC)
        )
        values = [key(d) for d in roster]
        assert values == sorted(values)

    def test_search_does_not_change_profiles(self, service):
        roster = service.search_doctors(DoctorSearchParams(count=10, prefix="same"))
        for doctor in roster:
            assert doctor == synthesize_doctor(doctor.id)


class TestReferenceData:
    def test_provinces(self):
        provinces = DoctorService.list_provinces()
        assert [p.name for p in provinces] == list(PROVINCES)
        gauteng = provinces[0]
        assert "Johannesburg" in gauteng.cities
        assert (gauteng.postal_code_range.min, gauteng.postal_code_range.max) == (1000, 2999)

    def test_specialties(self):
        assert DoctorService.list_specialties() == list(SPECIALTIES)
        assert len(SPECIALTIES) == 23
