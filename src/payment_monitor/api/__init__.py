"""FastAPI application for the payment monitor."""
