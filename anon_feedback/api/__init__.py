"""
FastAPI web application.

Serves:
- GET /admin/dashboard and its POST actions - Owner dashboard
- GET /, /sign-in, /sign-up, /verify/{username}, /logout - Public pages
- GET /health - Service health check
"""

from anon_feedback.api.app import create_app

__all__ = ["create_app"]
