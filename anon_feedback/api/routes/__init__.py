"""Route modules for the FastAPI application."""
