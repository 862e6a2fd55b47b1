import os
from dotenv import load_dotenv

load_dotenv()

# API Keys and Config - loaded from .env
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Provider endpoints
REPLICATE_API_BASE = "https://api.replicate.com/v1"
FAL_RUN_BASE = "https://fal.run"
FAL_API_BASE = "https://api.fal.ai/v1"

# Schema cache
SCHEMA_CACHE_TTL = 10 * 60  # seconds

# Async job polling (fixed interval, no backoff)
POLL_INTERVAL = 1.0  # seconds
POLL_TIMEOUT = 5 * 60  # seconds

REQUEST_TIMEOUT = 60  # seconds, per provider HTTP call

# Output sizing
MB = 1024 * 1024
VIDEO_INLINE_LIMIT = 20 * MB  # larger videos are returned as a bare URL
LARGE_OUTPUT_WARNING = 10 * MB
RESPONSE_SIZE_WARNING = int(4.5 * MB)  # platform response ceiling is 5MB
