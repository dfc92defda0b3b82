"""Runtime configuration read from the environment."""

import os

# Storage
DATABASE_URL = os.getenv("GLOWMATCH_DATABASE_URL", "sqlite:///./glowmatch.db")
SQL_ECHO = os.getenv("GLOWMATCH_SQL_ECHO", "0") == "1"

# Logging
LOG_LEVEL = os.getenv("GLOWMATCH_LOG_LEVEL", "INFO").upper()

# Recommender knobs
DEFAULT_LIMIT = int(os.getenv("GLOWMATCH_DEFAULT_LIMIT", "20"))

# Server
HOST = os.getenv("GLOWMATCH_HOST", "0.0.0.0")
PORT = int(os.getenv("GLOWMATCH_PORT", "8000"))
