# app/generator/doctor_generator.py
"""
Deterministic synthetic doctor profiles and availability grids.

Every function here is pure: it builds its own SeededRandom from the inputs,
performs no I/O and keeps no state between calls. Nothing is cached; the same
identifier always recomputes to the same output.

Usage:
    doctor = synthesize_doctor("doctor-test-1")
    slots = generate_available_slots("doctor-test-1", "2024-06-01")
    roster = generate_doctor_list(20, seed_prefix="home")
"""

import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from .seeded_random import SeededRandom
from .reference_data import (
    MALE_FIRST_NAMES,
    FEMALE_FIRST_NAMES,
    SURNAMES,
    SPECIALTIES,
    PROVINCES,
    CITIES_BY_PROVINCE,
    POSTAL_CODE_RANGES,
    PHONE_AREA_CODES,
    PRACTICE_STREET_NAMES,
    REGISTRATION_PREFIX,
)

DOCTOR_ID_PREFIX = "doctor-"
USER_ID_PREFIX = "user-"
DEFAULT_LIST_PREFIX = "list"

_DOCTOR_ID_PATTERN = re.compile(r"doctor-[a-z0-9-]+")

# Synthetic-data parameters
MIN_RATING = 4.0
RATING_SPAN = 1.0
REVIEW_COUNT_RANGE = (15, 250)
CONSULTATION_FEE_RANGE = (450, 1200)
REGISTRATION_NUMBER_RANGE = (100000, 999999)
SLOT_START_HOUR = 9
SLOT_END_HOUR = 16
SLOT_MINUTES = (0, 30)
SLOT_UNAVAILABLE_THRESHOLD = 0.2


@dataclass(frozen=True)
class GeneratedDoctor:
    """A doctor profile computed from its identifier; never stored."""

    id: str
    user_id: str
    first_name: str
    last_name: str
    specialty: str
    hpcsa_number: str
    phone: str
    province: str
    city: str
    zip_code: str
    practice_address: str
    is_verified: bool
    rating: str
    review_count: int
    consultation_fee: str

    def to_dict(self) -> dict[str, Any]:
        """Render with the public camelCase field names."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "specialty": self.specialty,
            "hpcsaNumber": self.hpcsa_number,
            "phone": self.phone,
            "province": self.province,
            "city": self.city,
            "zipCode": self.zip_code,
            "practiceAddress": self.practice_address,
            "isVerified": self.is_verified,
            "rating": self.rating,
            "reviewCount": self.review_count,
            "consultationFee": self.consultation_fee,
        }


@dataclass(frozen=True)
class AvailabilitySlot:
    """One half-hour booking slot."""

    time: str
    available: bool
    datetime: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "available": self.available,
            "datetime": self.datetime,
        }


def _format_fixed(value: float, digits: int) -> str:
    """
    Format ``value`` with a fixed number of decimals, rounding half up.

    Works on the exact binary value of the float, so 4.25 renders as "4.3"
    where Python's own formatting would round half to even ("4.2").
    """
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _user_id_for(doctor_id: str) -> str:
    return USER_ID_PREFIX + doctor_id.replace(DOCTOR_ID_PREFIX, "", 1)


def synthesize_doctor(doctor_id: str) -> GeneratedDoctor:
    """
    Build the complete profile for ``doctor_id``.

    Accepts any string; the identifier shape is checked separately by
    is_valid_doctor_id(). The draw order below is fixed: moving or adding a
    draw changes every value after it.
    """
    rng = SeededRandom(doctor_id)

    is_male = rng.random() > 0.5
    first_name = rng.choice(MALE_FIRST_NAMES if is_male else FEMALE_FIRST_NAMES)
    last_name = rng.choice(SURNAMES)

    province = rng.choice(PROVINCES)
    city = rng.choice(CITIES_BY_PROVINCE[province])

    specialty = rng.choice(SPECIALTIES)
    rating = _format_fixed(MIN_RATING + rng.random() * RATING_SPAN, 1)
    review_count = rng.randint(*REVIEW_COUNT_RANGE)
    consultation_fee = rng.randint(*CONSULTATION_FEE_RANGE)

    hpcsa_number = f"{REGISTRATION_PREFIX}{rng.randint(*REGISTRATION_NUMBER_RANGE)}"

    area_code = rng.choice(PHONE_AREA_CODES)
    exchange = rng.randint(100, 999)
    line = rng.randint(1000, 9999)
    phone = f"+27 {area_code} {exchange} {line}"

    zip_code = str(rng.randint(*POSTAL_CODE_RANGES[province]))

    street_number = rng.randint(1, 999)
    street_name = rng.choice(PRACTICE_STREET_NAMES)
    practice_address = f"{street_number} {street_name}, {city}"

    return GeneratedDoctor(
        id=doctor_id,
        user_id=_user_id_for(doctor_id),
        first_name=first_name,
        last_name=last_name,
        specialty=specialty,
        hpcsa_number=hpcsa_number,
        phone=phone,
        province=province,
        city=city,
        zip_code=zip_code,
        practice_address=practice_address,
        is_verified=True,
        rating=rating,
        review_count=review_count,
        consultation_fee=f"{consultation_fee}.00",
    )


def generate_available_slots(doctor_id: str, date: str) -> list[AvailabilitySlot]:
    """
    Build one day's half-hour grid (09:00 to 16:00 inclusive) for a doctor.

    ``date`` is an opaque key component and is embedded verbatim in each
    slot's datetime; callers validate it. Roughly 80% of slots are available.
    """
    rng = SeededRandom(f"{doctor_id}-{date}")
    slots: list[AvailabilitySlot] = []

    for hour in range(SLOT_START_HOUR, SLOT_END_HOUR + 1):
        for minute in SLOT_MINUTES:
            if hour == SLOT_END_HOUR and minute >= 30:
                break

            time_string = f"{hour:02d}:{minute:02d}"
            slots.append(
                AvailabilitySlot(
                    time=time_string,
                    available=rng.random() > SLOT_UNAVAILABLE_THRESHOLD,
                    datetime=f"{date}T{time_string}:00.000Z",
                )
            )

    return slots


def list_doctor_id(seed_prefix: str, index: int) -> str:
    return f"{DOCTOR_ID_PREFIX}generated-{seed_prefix}-{index}"


def generate_doctor_list(
    count: int, seed_prefix: str = DEFAULT_LIST_PREFIX
) -> list[GeneratedDoctor]:
    """
    Build a roster of ``count`` doctors with ids doctor-generated-<prefix>-<i>.

    Each entry is synthesized independently, so growing ``count`` only
    appends entries and never changes earlier ones.
    """
    return [
        synthesize_doctor(list_doctor_id(seed_prefix, i))
        for i in range(1, count + 1)
    ]


def is_valid_doctor_id(doctor_id: str) -> bool:
    """Check that ``doctor_id`` is ``doctor-`` followed by [a-z0-9-]+."""
    return _DOCTOR_ID_PATTERN.fullmatch(doctor_id) is not None


__all__ = [
    "GeneratedDoctor",
    "AvailabilitySlot",
    "synthesize_doctor",
    "generate_available_slots",
    "generate_doctor_list",
    "list_doctor_id",
    "is_valid_doctor_id",
    "DEFAULT_LIST_PREFIX",
]
