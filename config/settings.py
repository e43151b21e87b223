"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (access tokens) should be in .env, NOT here
- Import these settings in modules: from config.settings import HTTP_TIMEOUT_SECONDS
- Fixed platform wire constants live in ganjing/constants.py instead
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# API CONFIGURATION
# =============================================================================

# Base hosts - override to point the client at a staging or mock server
GANJING_API_BASE = os.getenv("GANJING_API_BASE", "https://gw.ganjingworld.com")
GANJING_IMG_API_BASE = os.getenv(
    "GANJING_IMG_API_BASE",
    "https://imgapi.cloudokyo.cloud",
)
GANJING_VOD_API_BASE = os.getenv(
    "GANJING_VOD_API_BASE",
    "https://vodapi.cloudokyo.cloud",
)

# HTTP request timeout (seconds)
# Video uploads are sent in one request, so this must cover the whole file
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "300"))

# =============================================================================
# TOKEN CONFIGURATION
# =============================================================================

# Upload tokens are re-acquired after this many seconds
UPLOAD_TOKEN_TTL_SECONDS = float(os.getenv("UPLOAD_TOKEN_TTL_SECONDS", "3600"))

# =============================================================================
# PROCESSING STATUS POLLING
# =============================================================================

DEFAULT_POLL_INTERVAL_SECONDS = float(os.getenv("DEFAULT_POLL_INTERVAL_SECONDS", "5"))
DEFAULT_MAX_WAIT_SECONDS = float(os.getenv("DEFAULT_MAX_WAIT_SECONDS", "600"))  # 10 min

# =============================================================================
# THUMBNAIL EXTRACTION
# =============================================================================

THUMBNAIL_TIME_OFFSET_SECONDS = 1.0  # Frame position used for auto thumbnails
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")
FFMPEG_TIMEOUT_SECONDS = 60
FFMPEG_JPEG_QUALITY = 2  # -q:v, 1-31, lower is better

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# =============================================================================
# SECRETS (loaded from .env)
# =============================================================================
# IMPORTANT: These should NEVER be committed to version control!
# Create a .env file in the project root with these values

# Raw access token from a logged-in GanJing World session
GANJING_ACCESS_TOKEN = os.getenv("GANJING_ACCESS_TOKEN", "")

# Channel that owns uploaded content (used by the scripts)
GANJING_CHANNEL_ID = os.getenv("GANJING_CHANNEL_ID", "")
