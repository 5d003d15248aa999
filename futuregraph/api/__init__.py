"""HTTP API for FutureGraph (FastAPI)."""
