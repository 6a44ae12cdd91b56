import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./devices.db")

# Mounted in front of every device route, e.g. "/api"
API_PREFIX = os.getenv("API_PREFIX", "")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma separated list of allowed CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]
