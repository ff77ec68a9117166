"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real remote API
os.environ.setdefault("REMOTE_ASSOCIATION_REMOTE_API_BASE_URL", "http://remote.test")
os.environ.setdefault("REMOTE_ASSOCIATION_REMOTE_API_TOKEN", "test-fake-token")
