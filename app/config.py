"""Application settings, all read from environment variables."""

import os
from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./eventhub.db")

# Auth tokens
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))

# HTTP
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]
API_PREFIX = os.getenv("API_PREFIX", "/api")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Payment gateway: "simulated" always succeeds, "declining" always fails
PAYMENT_GATEWAY = os.getenv("PAYMENT_GATEWAY", "simulated")

# Seed accounts (seed_data.py)
SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@manageevent.com")
SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
SEED_ORGANIZER_EMAIL = os.getenv("SEED_ORGANIZER_EMAIL", "organizer@manageevent.com")
SEED_ORGANIZER_PASSWORD = os.getenv("SEED_ORGANIZER_PASSWORD", "organizer123")
