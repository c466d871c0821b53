# app/generator/__init__.py
from .seeded_random import *
from .reference_data import *
from .doctor_generator import *
