from .config import *  # noqa: F401,F403

JWT_SECRET = "test-secret"

DEBUG = False
TESTING = True

# Tests inject in-memory repositories; never touch a real server from here.
AUTO_INIT_DB = False
SEED_DEFAULT_ADMIN = False
