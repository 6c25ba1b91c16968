"""Global pytest configuration."""

import os

# Keep the module-level app off the on-disk database and real providers
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
