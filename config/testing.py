from config.config import db_config_from_env, toil_policy_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORAGE_BACKEND = "memory"

TOIL_POLICY = toil_policy_from_env()

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
