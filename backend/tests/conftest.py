"""Root conftest — shared test configuration."""

import os

# Settings are read once (lru_cache): set test values before argan_hr is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault("LOG_FORMAT", "text")
