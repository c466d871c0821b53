# app/generator/reference_data.py
"""
Static reference tables for synthetic doctor profiles.

Order matters: the generator indexes into these tuples with seeded draws,
so reordering or extending any table changes existing generated profiles.
"""

from types import MappingProxyType
from typing import Mapping

MALE_FIRST_NAMES: tuple[str, ...] = (
    "Michael", "David", "John", "James", "Robert",
    "Sipho", "Thabo", "Mandla", "Johan", "Pieter",
    "Ahmed", "Rajesh", "Ryan", "Bradley", "Gareth",
)  # fmt: skip

FEMALE_FIRST_NAMES: tuple[str, ...] = (
    "Sarah", "Nomsa", "Thandiwe", "Michelle", "Andrea",
    "Lerato", "Palesa", "Susan", "Jennifer", "Catherine",
    "Fatima", "Priya", "Nicole", "Candice", "Samantha",
)  # fmt: skip

SURNAMES: tuple[str, ...] = (
    "Mthembu", "Van Der Merwe", "Dlamini", "Johnson", "Smith",
    "Nkomo", "Coetzee", "Steyn", "Mbeki", "Botha",
    "Ndlovu", "Williams", "Brown", "Van Wyk", "Pretorius",
    "Mahlangu", "Molefe", "Khumalo", "Sithole", "Mokoena",
    "Patel", "Khan", "Hassan", "Reddy", "Naidoo",
    "Pillay", "Singh", "Maharaj", "Desai", "Sharma",
)  # fmt: skip

SPECIALTIES: tuple[str, ...] = (
    "General Practice", "Cardiology", "Pediatrics", "Gynecology",
    "Orthopedics", "Dermatology", "Neurology", "Psychiatry",
    "Emergency Medicine", "Radiology", "Anesthesiology", "Oncology",
    "Ophthalmology", "ENT", "Urology", "Gastroenterology",
    "Pulmonology", "Endocrinology", "Rheumatology", "Infectious Diseases",
    "Nephrology", "Plastic Surgery", "Pathology",
)  # fmt: skip

PROVINCES: tuple[str, ...] = (
    "Gauteng",
    "Western Cape",
    "KwaZulu-Natal",
    "Eastern Cape",
    "Limpopo",
    "Mpumalanga",
    "North West",
    "Free State",
    "Northern Cape",
)

CITIES_BY_PROVINCE: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Gauteng": (
            "Johannesburg", "Pretoria", "Sandton", "Roodepoort",
            "Germiston", "Benoni", "Boksburg",
        ),
        "Western Cape": (
            "Cape Town", "Stellenbosch", "Paarl", "George", "Worcester", "Hermanus",
        ),
        "KwaZulu-Natal": (
            "Durban", "Pietermaritzburg", "Richards Bay", "Newcastle", "Ladysmith",
        ),
        "Eastern Cape": (
            "Port Elizabeth", "East London", "Uitenhage",
            "King Williams Town", "Grahamstown",
        ),
        "Limpopo": ("Polokwane", "Tzaneen", "Thohoyandou", "Giyani", "Mokopane"),
        "Mpumalanga": ("Nelspruit", "Witbank", "Secunda", "Standerton", "Middelburg"),
        "North West": ("Rustenburg", "Klerksdorp", "Potchefstroom", "Mafikeng", "Brits"),
        "Free State": ("Bloemfontein", "Welkom", "Kroonstad", "Bethlehem", "Sasolburg"),
        "Northern Cape": ("Kimberley", "Upington", "Springbok", "De Aar", "Kuruman"),
    }
)  # fmt: skip

# Inclusive (min, max) postal code ranges
POSTAL_CODE_RANGES: Mapping[str, tuple[int, int]] = MappingProxyType(
    {
        "Gauteng": (1000, 2999),
        "Western Cape": (7000, 8999),
        "KwaZulu-Natal": (3000, 4999),
        "Eastern Cape": (5000, 6999),
        "Limpopo": (700, 999),
        "Mpumalanga": (1000, 1999),
        "North West": (2500, 2999),
        "Free State": (9000, 9999),
        "Northern Cape": (8000, 8999),
    }
)

PHONE_AREA_CODES: tuple[str, ...] = ("011", "021", "031", "041", "051", "012")

PRACTICE_STREET_NAMES: tuple[str, ...] = (
    "Medical Centre",
    "Healthcare Plaza",
    "Wellness Centre",
    "Professional Centre",
    "Medical Complex",
    "Health Hub",
    "Medical Park",
    "Specialist Centre",
)

# Regulatory prefix for synthetic HPCSA-style registration numbers
REGISTRATION_PREFIX = "MP"


__all__ = [
    "MALE_FIRST_NAMES",
    "FEMALE_FIRST_NAMES",
    "SURNAMES",
    "SPECIALTIES",
    "PROVINCES",
    "CITIES_BY_PROVINCE",
    "POSTAL_CODE_RANGES",
    "PHONE_AREA_CODES",
    "PRACTICE_STREET_NAMES",
    "REGISTRATION_PREFIX",
]
