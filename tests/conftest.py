"""Root conftest — shared test configuration."""

import os

# Point the app at a throwaway in-memory database before config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "WARNING")
