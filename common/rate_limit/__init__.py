# common/rate_limit/__init__.py
from .rate_limiter import *
