"""
Application configuration.
All values come from environment variables with development defaults.
"""
import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("FAMILYHUB_DATABASE_URL", "sqlite:///./familyhub.db")

# Shared secret between the identity gateway and this API
# In production keep it in the environment or a secret store
API_KEY = os.getenv("FAMILYHUB_API_KEY", "your-secret-key-change-me")

# Logging
DEFAULT_LOG_DIRECTORY_PROD = "/var/log/familyhub"
DEFAULT_LOG_DIRECTORY_DEV = "./logs"
LOG_DIR = os.getenv("FAMILYHUB_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("FAMILYHUB_LOG_FILE", "app.log")
LOG_LEVEL = os.getenv("FAMILYHUB_LOG_LEVEL", "INFO").upper()

CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "FAMILYHUB_CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
    ).split(",")
    if origin.strip()
]

# Nightly ledger reconciliation audit
RECONCILE_ENABLED = _env_bool("FAMILYHUB_RECONCILE_ENABLED", True)
RECONCILE_TIME = os.getenv("FAMILYHUB_RECONCILE_TIME", "03:30")  # HH:MM

# Default page size for ledger listings
DEFAULT_TRANSACTION_LIMIT = 50
