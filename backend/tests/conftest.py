"""Root conftest — shared test configuration."""

import os

# Importing app.main builds a default app; keep it fast and deterministic
os.environ.setdefault("REPOSITORY_LATENCY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
