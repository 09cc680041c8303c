"""
Service configuration

All settings come from environment variables so the same image can run in
production, locally and under the test suite.
"""

import os

PORT = int(os.getenv("PORT", "8080"))
HOST = os.getenv("HOST", "0.0.0.0")

DATABASE_URL = os.getenv(
    "DATABASE_URL", "postgresql+psycopg2://backend_user:changeme@db:5432/blog_db"
)
# Separate target for the test suite (tests use a temp SQLite file when unset)
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
FRONTEND_URL = os.getenv("FRONTEND_URL")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
