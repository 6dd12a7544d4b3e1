"""
Client Defaults

Central location for the wire-level defaults shared by the client,
the retry policy and the redactor.
"""

# Backend the web client talks to, and the API root prepended to every route
DEFAULT_BASE_URL = "http://localhost:5678"
DEFAULT_API_PREFIX = "/api/v1"

# 10 minutes, sized for long-running AI generation endpoints
DEFAULT_TIMEOUT_MS = 600_000

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
}

REQUEST_ID_HEADER = "X-Request-Id"

# Retry defaults seeded onto known-retryable routes
IDEMPOTENT_METHODS = ("GET", "HEAD", "OPTIONS")
DEFAULT_RETRY_LIMIT = 2
DEFAULT_RETRY_DELAY_BASE_MS = 300
AI_CONFIGS_PATH = "/ai-configs"
OPTIMIZE_PROMPT_PATH = "/ai/optimize-prompt"

# Redaction
REDACTION_MASK = "***"
BODY_REDACT_KEYS = ("api_key", "authorization", "password", "token")
HEADER_REDACT_KEYS = ("authorization", "cookie", "set-cookie")

# Environment variables read by ClientConfig.from_env()
ENV_BASE_URL = "DRAMA_API_BASE_URL"
ENV_API_PREFIX = "DRAMA_API_PREFIX"
ENV_TIMEOUT_MS = "DRAMA_API_TIMEOUT_MS"
ENV_LOG_LEVEL = "DRAMA_API_LOG_LEVEL"
