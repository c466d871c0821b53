# app/schemas/__init__.py
from .doctor_schema import *
from .slot_schema import *
from .reference_schema import *
