import os

from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DB_CONFIG = dict(DB_CONFIG, database=os.getenv("DB_NAME", "timekeeping_test"))  # noqa: F405

DEBUG = False
TESTING = True
LOG_JSON = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
