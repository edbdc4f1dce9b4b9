"""Configuration for the CLI client."""

import os

# Configuration
API_URL = os.getenv("OCEAN_NOTES_API_URL", "http://localhost:8000")
REQUEST_TIMEOUT = 10.0
