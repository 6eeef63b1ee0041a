"""Club Hub API service (FastAPI)."""
