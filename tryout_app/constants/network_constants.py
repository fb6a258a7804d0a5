"""Network configuration constants for the tryout application."""

DEFAULT_API_BASE_URL: str = "http://localhost:8000/api/v1"
API_PREFIX: str = "/api/v1"
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 10.0
DEFAULT_BACKEND_HOST: str = "127.0.0.1"
DEFAULT_BACKEND_PORT: int = 8000
