"""Server-wide constants."""

PROJECT_NAME = "Compliance-AI"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

# Header carrying the acting user's uid for workflow and admin operations.
USER_ID_HEADER = "X-User-Id"
