"""
Analysis service: stored designs and cities in, cached results out.

Wires the repositories, the energy calculator and the result cache together
for the API and CLI. Cache entries for a design are invalidated whenever the
design changes or is deleted.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from ..cache.result_cache import AnalysisCache, get_cache
from ..core.exceptions import NotFoundError, ValidationError
from ..core.models import AnalysisResult, BuildingDesign, CityData, DailyEnergyProfile, Season
from ..db.repository import BuildingDesignRepository, CityDataRepository
from ..utils.validation import validate_hour, validate_season
from .comparison import BuildingRanking, ComparativeAnalysis, comparative_analysis, rank_designs
from .energy_calculator import EnergyCalculator

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Design CRUD and energy analysis over the document store.

    Usage:
        service = AnalysisService()
        design = service.create_design(payload)
        results = service.analyze_buildings([design.id])
    """

    def __init__(
        self,
        designs: Optional[BuildingDesignRepository] = None,
        cities: Optional[CityDataRepository] = None,
        cache: Optional[AnalysisCache] = None,
        calculator: Optional[EnergyCalculator] = None,
    ):
        self.designs = designs or BuildingDesignRepository()
        self.cities = cities or CityDataRepository()
        self.cache = cache if cache is not None else get_cache()
        self.calculator = calculator or EnergyCalculator()

    # =========================================================================
    # Designs
    # =========================================================================

    def list_designs(self, building_id: Optional[str] = None) -> List[BuildingDesign]:
        return self.designs.list(building_id=building_id)

    def get_design(self, design_id: str) -> BuildingDesign:
        design = self.designs.get(design_id)
        if design is None:
            raise NotFoundError("Building design not found")
        return design

    def create_design(self, data: Mapping[str, Any]) -> BuildingDesign:
        return self.designs.create(data)

    def update_design(self, design_id: str, changes: Mapping[str, Any]) -> BuildingDesign:
        design = self.designs.update(design_id, changes)
        if design is None:
            raise NotFoundError("Building design not found")
        self.cache.invalidate(design_id)
        return design

    def delete_design(self, design_id: str) -> None:
        if not self.designs.delete(design_id):
            raise NotFoundError("Building design not found")
        self.cache.invalidate(design_id)

    def clear_designs(self) -> int:
        count = self.designs.clear()
        self.cache.flush()
        return count

    # =========================================================================
    # Cities
    # =========================================================================

    def list_cities(self) -> List[CityData]:
        return self.cities.list()

    def get_city(self, name: str) -> CityData:
        """
        Raises:
            ValidationError: If the city is unknown
        """
        city = self.cities.get(name) if name else None
        if city is None:
            known = [c.name for c in self.cities.list()]
            raise ValidationError(
                f"No data available for city: {name}",
                field="city",
                suggestions=[f"Supported cities: {', '.join(known)}"] if known else [],
            )
        return city

    # =========================================================================
    # Analysis
    # =========================================================================

    def analyze(
        self,
        design: BuildingDesign,
        city: CityData,
        season: Optional[Season] = None,
        hour: Optional[int] = None,
    ) -> AnalysisResult:
        """Cached analysis of one design in one city."""
        context = {"building_id": design.id, "city": city.name}

        if design.id:
            cached = self.cache.get(design.id, city.name, season, hour)
            if cached is not None:
                logger.debug(f"Cache hit for {design.name}", extra=context)
                return cached

        logger.info(f"Analyzing building: {design.name}", extra=context)
        result = self.calculator.analyze(design, city, season=season, hour=hour)
        self.cache.set(result)
        return result

    def analyze_design(
        self,
        design_id: str,
        city: str,
        season: Optional[str] = None,
        hour: Optional[int] = None,
    ) -> AnalysisResult:
        season, hour = self._granularity(season, hour)
        return self.analyze(self.get_design(design_id), self.get_city(city), season, hour)

    def analyze_buildings(
        self,
        ids: Optional[Sequence[str]] = None,
        cities: Optional[Sequence[str]] = None,
        season: Optional[str] = None,
        hour: Optional[int] = None,
    ) -> List[AnalysisResult]:
        """
        Analyze designs across cities, most efficient (lowest energy) first.

        Args:
            ids: Design IDs (default: all designs)
            cities: City names (default: all cities)
            season: Optional season
            hour: Optional hour of day

        Raises:
            NotFoundError: If no designs or no cities match
            StoreError: If stored city data is malformed
        """
        season, hour = self._granularity(season, hour)

        designs = self.designs.list_by_ids(list(ids)) if ids else self.designs.list()
        logger.info(f"Found building designs: {len(designs)}")
        if not designs:
            raise NotFoundError("No building designs found")

        city_data = self._select_cities(cities)

        results = [
            self.analyze(design, city, season, hour)
            for design in designs
            for city in city_data
        ]
        results.sort(key=lambda r: r.energy_consumption)

        logger.info(f"Analysis completed for {len(results)} building-city combinations")
        return results

    def daily_profile(
        self,
        design_id: str,
        city: str,
        season: Optional[str] = None,
        orientation_weighting: bool = False,
    ) -> DailyEnergyProfile:
        return self.calculator.daily_profile(
            self.get_design(design_id),
            self.get_city(city),
            season=validate_season(season),
            orientation_weighting=orientation_weighting,
        )

    def rank(
        self,
        city: str,
        season: Optional[str] = None,
        ids: Optional[Sequence[str]] = None,
    ) -> List[BuildingRanking]:
        return rank_designs(
            self._select_designs(ids), self.get_city(city), season=season, calculator=self.calculator
        )

    def compare(
        self,
        city: str,
        season: Optional[str] = None,
        ids: Optional[Sequence[str]] = None,
    ) -> ComparativeAnalysis:
        return comparative_analysis(
            self._select_designs(ids), self.get_city(city), season=season, calculator=self.calculator
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _granularity(season: Optional[str], hour: Optional[int]):
        """Normalize season/hour; an hour without a season means summer."""
        if hour is not None:
            return validate_season(season), validate_hour(hour)
        if season:
            return validate_season(season), None
        return None, None

    def _select_designs(self, ids: Optional[Sequence[str]]) -> List[BuildingDesign]:
        designs = self.designs.list_by_ids(list(ids)) if ids else self.designs.list()
        if not designs:
            raise NotFoundError("No building designs found")
        return designs

    def _select_cities(self, names: Optional[Sequence[str]]) -> List[CityData]:
        city_data = self.cities.list()
        if names:
            wanted = {n.strip().lower() for n in names}
            unknown = wanted - {c.name.lower() for c in city_data}
            if unknown:
                raise ValidationError(
                    f"No data available for city: {', '.join(sorted(unknown))}",
                    field="city",
                )
            city_data = [c for c in city_data if c.name.lower() in wanted]
        if not city_data:
            raise NotFoundError("No city data found")
        return city_data
