# app/services/v1/__init__.py
from .doctor_service import *
