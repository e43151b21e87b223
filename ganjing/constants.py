"""
GanJing Constants

Wire-level constants and enums for the GanJing World upload client.
Deployment specific values (tokens, base URL overrides, timeouts) live in
config/settings.py; everything here is fixed by the platform API.
"""

from enum import Enum

# =============================================================================
# API ENDPOINTS
# =============================================================================

# Paths, appended to the hosts in config.settings
UPLOAD_TOKEN_PATH = "/v1.0c/get-vod-token"
REFRESH_TOKEN_PATH = "/v1.0c/auth/refresh"
ADD_CONTENT_PATH = "/v1.0c/add-content"
IMAGE_UPLOAD_PATH = "/api/v1/image"
VIDEO_UPLOAD_PATH = "/api/v1/video"
VIDEO_STATUS_PATH = "/api/v1/status"

# Public watch page: WEB_VIDEO_URL_PREFIX + content id
WEB_VIDEO_URL_PREFIX = "https://www.ganjingworld.com/video/"

# =============================================================================
# REQUEST CONFIGURATION
# =============================================================================

# Thumbnail resolution breakpoints sent in the resizing-list header
DEFAULT_THUMBNAIL_SIZES = (140, 240, 360, 380, 480, 580, 672, 960, 1280, 1920)

# Substring markers used to pick convenience URLs out of image_url
THUMBNAIL_MARKER_672 = "672.webp"
THUMBNAIL_MARKER_1280 = "1280.webp"
THUMBNAIL_MARKER_1920 = "1920.webp"

RESIZING_LIST_HEADER = "resizing-list"
VIDEO_ACCEPT_LANGUAGE = "en-US,en;q=0.9"

IMAGE_MIME_TYPE = "image/jpeg"
VIDEO_MIME_TYPE = "video/mp4"

CONTENT_TYPE_VIDEO = "Video"
CONTENT_MODE_DRAFT = "draft"

DEFAULT_LANGUAGE = "en-US"

# result.result_code values that mean success
SUCCESS_RESULT_CODES = frozenset({0, 200000, 201000})

# =============================================================================
# ENUMS
# =============================================================================


class Category(Enum):
    """Platform category codes (cat10 and cat28 do not exist upstream)"""

    ARCHITECTURE = "cat1"
    ARTS = "cat2"
    AUTOS = "cat3"
    BEAUTY = "cat4"
    BUSINESS = "cat5"
    LIFE_HACKS = "cat6"
    EDUCATION = "cat7"
    ENTERTAINMENT = "cat8"
    FOOD = "cat9"
    GOVERNMENT = "cat11"
    HEALTH = "cat12"
    CULTURE = "cat13"
    KIDS = "cat14"
    LIFESTYLE = "cat15"
    MILITARY = "cat16"
    POPULAR_MUSIC = "cat17"
    NATURE = "cat18"
    TALK_SHOWS = "cat19"
    NONPROFIT = "cat20"
    PETS = "cat21"
    FINANCE = "cat22"
    TECH = "cat23"
    RELIGION = "cat24"
    SPORTS = "cat25"
    MYSTERIES = "cat26"
    TRAVEL = "cat27"
    RELATIONSHIP = "cat29"
    DANCE = "cat30"
    CAREER = "cat31"
    NEWS = "cat32"
    TV = "cat33"
    CLASSICAL_MUSIC = "cat34"
    HISTORY = "cat35"
    FASHION = "cat36"
    LAW = "cat37"
    IMMIGRATION = "cat38"
    PEOPLE = "cat39"
    LITERATURE = "cat40"
    INDUSTRIAL_TECHNOLOGY = "cat41"
    AGRICULTURE = "cat42"
    HOME_PROJECT = "cat43"
    SCULPTURE = "cat44"
    CALLIGRAPHY = "cat45"
    PHOTOGRAPHY = "cat46"
    MOVIES = "cat47"


class Visibility(Enum):
    """Content visibility"""

    PUBLIC = "public"
    PRIVATE = "private"
    UNLISTED = "unlisted"


class ProcessingStatus(Enum):
    """Transcoding status reported by the status endpoint"""

    UPLOADING = "uploading"
    IN_PROGRESS = "in_progress"
    PROCESSED = "processed"
    FAILED = "failed"
    UNKNOWN = "unknown"  # Any value the platform sends that we don't know


class UploadPhase(Enum):
    """Workflow phases, in the order the controller walks through them"""

    NOT_STARTED = "not_started"
    GETTING_TOKEN = "getting_token"
    UPLOADING_THUMBNAIL = "uploading_thumbnail"
    CREATING_DRAFT = "creating_draft"
    UPLOADING_VIDEO = "uploading_video"
    CHECKING_STATUS = "checking_status"
    WAITING_FOR_PROCESSING = "waiting_for_processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ErrorKind(Enum):
    """Error categories carried by GanJingError"""

    FILE_NOT_FOUND = "file_not_found"
    FILE_UNREADABLE = "file_unreadable"
    THUMBNAIL_REQUIRED = "thumbnail_required"
    EXTRACTION_UNAVAILABLE = "extraction_unavailable"
    EXTRACTION_FAILED = "extraction_failed"
    TRANSPORT = "transport"
    APPLICATION = "application"
    PARSE = "parse"


class ParseErrorKind(Enum):
    """What exactly was wrong with a response body"""

    INVALID_JSON = "invalid_json"
    MALFORMED_ENVELOPE = "malformed_envelope"
    MISSING_FIELD = "missing_field"
    INVALID_VALUE = "invalid_value"
