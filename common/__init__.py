# common/__init__.py
from .context_vars import *
from .api_error import *
from .config import *
