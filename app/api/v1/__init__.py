# app/api/v1/__init__.py
from .doctor_router import *
from .reference_router import *
