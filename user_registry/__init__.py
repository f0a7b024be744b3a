"""In-memory user registration service (FastAPI)."""
