#!/usr/bin/env python3
"""Block until the PostgreSQL server behind DATABASE_URL accepts connections.

Run before ``alembic upgrade head`` in container start-up scripts.
"""
import sys
import os
import time
import psycopg2
from psycopg2 import OperationalError
from urllib.parse import urlparse

DEFAULT_DATABASE_URL = "postgresql+asyncpg://postgres:root@db/postgres"


def wait_for_db(database_url: str, max_retries: int = 30, delay: float = 1.0) -> bool:
    """Poll the server's maintenance database until it answers or retries run out."""
    parsed = urlparse(database_url)
    if not parsed.scheme.startswith("postgresql"):
        print(f"Nothing to wait for with scheme '{parsed.scheme}'")
        return True

    for attempt in range(1, max_retries + 1):
        try:
            conn = psycopg2.connect(
                host=parsed.hostname or "db",
                port=parsed.port or 5432,
                user=parsed.username or "postgres",
                password=parsed.password or "",
                dbname="postgres",
                connect_timeout=3,
            )
            conn.close()
            print("Database server is ready!")
            return True
        except OperationalError:
            print(f"Database server is unavailable - waiting... ({attempt}/{max_retries})")
            time.sleep(delay)

    print("Database connection failed after maximum retries")
    return False


if __name__ == "__main__":
    url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    sys.exit(0 if wait_for_db(url) else 1)
