# common/logger/logger_middleware/__init__.py
from .request_timer import *
from .request_stats import *
from .middleware_types import *
from .logger_middleware import *
