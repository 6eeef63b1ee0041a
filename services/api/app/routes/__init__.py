"""API router package.

This package contains the HTTP route modules for the FastAPI API service.

Most code should import the composed router via:

    from app.routes import router

The actual composition lives in `services/api/app/routes/api_router.py`.
"""

from .api_router import router
