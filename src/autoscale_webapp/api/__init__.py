"""FastAPI application, routes and dependency wiring."""
