"""Project-wide constants (service identity, defaults, MIME table)."""

SERVICE_NAME: str = "PBB-CDS"
SERVICE_TITLE: str = "PBB Content Distribution System"
SERVICE_VERSION: str = "1.0.0"

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 3003
DEFAULT_JWT_SECRET: str = "your-secret-key"
DEFAULT_ARCHIVE_NAME: str = "CONTENT.zip"
DEFAULT_CONTENT_DIR_NAME: str = "CONTENT"

JWT_ALGORITHM: str = "HS256"
TOKEN_COOKIE_NAME: str = "token"
DEFAULT_TOKEN_TTL_HOURS: int = 24

COPY_BUFFER_SIZE: int = 64 * 1024  # 64 KiB per read while unpacking

DEFAULT_MIME_TYPE: str = "application/octet-stream"
MIME_TYPES: dict = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".json": "application/json",
    ".txt": "text/plain",
}

CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization", "Cookie", "X-Requested-With"]
CORS_EXPOSED_HEADERS = ["Set-Cookie"]

# Served alongside FastAPI's own /docs.
DOCS_ALIAS_PATHS = ["/swagger", "/api"]
