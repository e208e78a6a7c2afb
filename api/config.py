"""Service configuration from environment variables."""

import os

BUCKET_COUNT: int = int(os.getenv("BUCKET_COUNT", "5"))
PREVIEW_TIME_ZONE: str = os.getenv("PREVIEW_TIME_ZONE", "")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
