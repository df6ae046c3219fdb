"""Root conftest - shared test configuration."""

import os

# Tests never reach the real user directory
os.environ.setdefault("USERS_API_URL", "http://users.test/users")
os.environ.setdefault("LOG_FORMAT", "text")
