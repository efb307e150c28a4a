"""Project-wide constants (limits, default ports, cache windows)."""

DEFAULT_PORT: int = 3001

MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024 * 1024  # 25 GiB per file

UPLOAD_COPY_BUFFER_BYTES: int = 1024 * 1024

MESSAGE_HISTORY_LIMIT: int = 1000

SYSTEM_INFO_CACHE_SECONDS: float = 2.0

THERMAL_ZONE_PATH: str = "/sys/class/thermal/thermal_zone0/temp"

FALLBACK_IP_ADDRESS: str = "127.0.0.1"

DOWNLOAD_PATH_PREFIX: str = "/api/download/"
