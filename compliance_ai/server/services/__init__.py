"""Domain services used by the API endpoints."""
