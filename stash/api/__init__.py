"""Resource gateway (FastAPI)."""
