"""
Facade Energy REST API - FastAPI Application.

Provides REST endpoints for building designs, city reference data and
cooling energy analysis.

Endpoints:
    GET    /                             - API info
    GET    /health                       - Health check with cache status
    GET    /building-designs             - List designs (?building_id=)
    POST   /building-designs             - Create design
    GET    /building-designs/{id}        - Get design
    PUT    /building-designs/{id}        - Update design
    DELETE /building-designs/{id}        - Delete design
    DELETE /building-designs             - Delete all designs
    GET    /cities                       - List cities
    GET    /cities/{name}                - Get city
    GET    /analysis/buildings           - Analyze designs across cities
    GET    /analysis/rankings            - Rank designs in a city
    GET    /analysis/compare             - Comparative analysis in a city
    GET    /analysis/{id}                - Analyze one design in one city
    GET    /analysis/{id}/profile        - 24-hour energy profile

Usage:
    uvicorn facade_energy.api.main:app --reload --port 5050

    # Or with the CLI
    facade-energy serve
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..analysis.comparison import carbon_emissions, peak_demand, weighted_heat_gain
from ..analysis.service import AnalysisService
from ..core.config import settings
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..core.models import AnalysisResult, BuildingDesign, CityData, DailyEnergyProfile
from ..db.seed import initialize_database
from ..utils.logging_config import ensure_logging
from ..utils.validation import describe_error, parse_id_list

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class BuildingDesignRequest(BaseModel):
    """
    Building design payload.

    Nested data is kept loose here; field checks happen in validation so that
    errors carry the offending field and suggestions.
    """
    id: Optional[str] = Field(None, description="Existing design ID (becomes the building group)")
    building_id: Optional[str] = Field(None, description="Building group ID")
    name: Optional[str] = Field(None, description="Design name", examples=["Glass tower, south-heavy"])
    facades: Optional[Dict[str, Any]] = Field(
        None,
        description="north/south/east/west facades, each with height, width, wwr, shgc",
    )
    skylight: Optional[Dict[str, Any]] = Field(None, description="Skylight width and length (m)")


class AnalysisResponse(AnalysisResult):
    """Analysis result with derived indicators."""
    carbon_emissions: float = Field(description="Grid CO2 for the cooling energy (tonnes)")
    peak_demand: float = Field(description="Estimated peak demand (kWh)")
    weighted_heat_gain: float = Field(description="Weighted facade/skylight metric (BTU)")


class ClearResponse(BaseModel):
    deleted: int


def _with_indicators(result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(
        **result.model_dump(),
        carbon_emissions=carbon_emissions(result.energy_consumption),
        peak_demand=peak_demand(result.energy_consumption),
        weighted_heat_gain=weighted_heat_gain(result.heat_gain),
    )


# =============================================================================
# DEPENDENCIES
# =============================================================================

@lru_cache(maxsize=1)
def get_service() -> AnalysisService:
    """Process-wide service over the configured store and cache."""
    return AnalysisService()


# =============================================================================
# FASTAPI APPLICATION
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_logging(settings.log_level, log_to_file=settings.log_to_file)
    if settings.seed_cities_on_startup:
        try:
            initialize_database()
        except StoreError as e:
            logger.error(f"Error initializing database: {e}")
    yield


app = FastAPI(
    title="Facade Energy API",
    description="Facade heat gain and cooling energy analysis for building designs",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=describe_error(exc))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/", tags=["General"])
def root():
    """API info."""
    return {
        "name": "Facade Energy API",
        "version": __version__,
        "description": "Facade heat gain and cooling energy analysis",
        "status": "healthy",
        "endpoints": {
            "designs": "GET/POST /building-designs",
            "design": "GET/PUT/DELETE /building-designs/{id}",
            "cities": "GET /cities",
            "analyze_buildings": "GET /analysis/buildings",
            "rankings": "GET /analysis/rankings",
            "compare": "GET /analysis/compare",
            "analyze_design": "GET /analysis/{id}",
            "profile": "GET /analysis/{id}/profile",
        },
        "documentation": "/docs",
    }


@app.get("/health", tags=["General"])
def health_check(service: AnalysisService = Depends(get_service)):
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__, "cache": service.cache.status()}


# Building designs

@app.get("/building-designs", response_model=List[BuildingDesign], tags=["Designs"])
def list_designs(
    building_id: Optional[str] = None,
    service: AnalysisService = Depends(get_service),
):
    """List designs, optionally only those of one building group."""
    return service.list_designs(building_id=building_id)


@app.post(
    "/building-designs",
    response_model=BuildingDesign,
    status_code=status.HTTP_201_CREATED,
    tags=["Designs"],
)
def create_design(request: BuildingDesignRequest, service: AnalysisService = Depends(get_service)):
    return service.create_design(request.model_dump(exclude_unset=True))


@app.delete("/building-designs", response_model=ClearResponse, tags=["Designs"])
def clear_designs(service: AnalysisService = Depends(get_service)):
    """Delete all designs."""
    return ClearResponse(deleted=service.clear_designs())


@app.get("/building-designs/{design_id}", response_model=BuildingDesign, tags=["Designs"])
def get_design(design_id: str, service: AnalysisService = Depends(get_service)):
    return service.get_design(design_id)


@app.put("/building-designs/{design_id}", response_model=BuildingDesign, tags=["Designs"])
def update_design(
    design_id: str,
    request: BuildingDesignRequest,
    service: AnalysisService = Depends(get_service),
):
    """Update a design; cached analyses of it are dropped."""
    return service.update_design(design_id, request.model_dump(exclude_unset=True))


@app.delete(
    "/building-designs/{design_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["Designs"],
)
def delete_design(design_id: str, service: AnalysisService = Depends(get_service)):
    service.delete_design(design_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# City data

@app.get("/cities", response_model=List[CityData], tags=["Cities"])
def list_cities(service: AnalysisService = Depends(get_service)):
    return service.list_cities()


@app.get("/cities/{name}", response_model=CityData, tags=["Cities"])
def get_city(name: str, service: AnalysisService = Depends(get_service)):
    city = service.cities.get(name)
    if city is None:
        raise NotFoundError(f"City not found: {name}")
    return city


# Analysis
# Static paths must be declared before /analysis/{design_id}.

@app.get("/analysis/buildings", response_model=List[AnalysisResponse], tags=["Analysis"])
def analyze_buildings(
    ids: Optional[str] = Query(None, description="Comma-separated design IDs (default: all)"),
    cities: Optional[str] = Query(None, description="Comma-separated city names (default: all)"),
    season: Optional[str] = None,
    hour: Optional[str] = Query(None, description="Hour of day, 0-23"),
    service: AnalysisService = Depends(get_service),
):
    """
    Analyze designs in every city, lowest energy consumption first.

    Without season or hour the result is the instantaneous peak estimate.
    """
    results = service.analyze_buildings(
        ids=parse_id_list(ids),
        cities=parse_id_list(cities),
        season=season,
        hour=hour,
    )
    return [_with_indicators(r) for r in results]


@app.get("/analysis/rankings", tags=["Analysis"])
def rank_designs(
    city: str,
    season: Optional[str] = None,
    ids: Optional[str] = None,
    service: AnalysisService = Depends(get_service),
):
    """Designs ranked by cooling cost at midday, cheapest first."""
    rankings = service.rank(city, season=season, ids=parse_id_list(ids))
    return [asdict(r) for r in rankings]


@app.get("/analysis/compare", tags=["Analysis"])
def compare_designs(
    city: str,
    season: Optional[str] = None,
    ids: Optional[str] = None,
    service: AnalysisService = Depends(get_service),
):
    """Best and worst performer, average cost and per-design efficiency."""
    return asdict(service.compare(city, season=season, ids=parse_id_list(ids)))


@app.get("/analysis/{design_id}", response_model=AnalysisResponse, tags=["Analysis"])
def analyze_design(
    design_id: str,
    city: str,
    season: Optional[str] = None,
    hour: Optional[str] = Query(None, description="Hour of day, 0-23"),
    service: AnalysisService = Depends(get_service),
):
    result = service.analyze_design(design_id, city, season=season, hour=hour)
    return _with_indicators(result)


@app.get("/analysis/{design_id}/profile", response_model=DailyEnergyProfile, tags=["Analysis"])
def daily_profile(
    design_id: str,
    city: str,
    season: Optional[str] = None,
    orientation_weighting: bool = False,
    service: AnalysisService = Depends(get_service),
):
    """Hourly heat gain, energy and cost over one day."""
    return service.daily_profile(
        design_id, city, season=season, orientation_weighting=orientation_weighting
    )


# =============================================================================
# CLI ENTRY POINT
# =============================================================================

def main(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "facade_energy.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
