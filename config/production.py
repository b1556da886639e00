import os

from .config import *  # noqa: F401,F403
from .config import _flag

JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")

DEBUG = False

AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
