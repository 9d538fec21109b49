"""
Facade Energy REST API.

FastAPI-based REST API for building designs and cooling energy analysis.

Usage:
    uvicorn facade_energy.api.main:app --reload

    # Or with the CLI
    facade-energy serve
"""

from .main import app, get_service

__all__ = ["app", "get_service"]
