import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("CONFIG_FILE_PATH", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./building_access.db")
    DB_CREATE_ALL = bool(data.get("DB_CREATE_ALL", True))
    STORAGE_BACKEND = data.get("STORAGE_BACKEND", "sql")  # sql | memory
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Signing key is never defaulted; the app refuses to start without one
    JWT_SECRET = data.get("JWT_SECRET", os.environ.get("JWT_SECRET", ""))
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_MINUTES = int(data.get("JWT_EXPIRES_MINUTES", 7 * 24 * 60))

    OTP_LENGTH = int(data.get("OTP_LENGTH", 4))
    OTP_TTL_SECONDS = int(data.get("OTP_TTL_SECONDS", 300))
    OTP_MAX_ATTEMPTS = int(data.get("OTP_MAX_ATTEMPTS", 3))
    # None keeps the built-in role table; a list names the roles that need OTP
    OTP_REQUIRED_ROLES = data.get("OTP_REQUIRED_ROLES")
    OTP_LOG_CODES = bool(data.get("OTP_LOG_CODES", False))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", os.environ.get("ADMIN_API_KEY", ""))
