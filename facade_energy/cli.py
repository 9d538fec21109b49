"""
Facade Energy CLI.

Command-line interface for running the API and analyzing building designs
stored as JSON files against the reference city data.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analysis.comparison import carbon_emissions, peak_demand, rank_designs
from .analysis.energy_calculator import EnergyCalculator
from .core.cities import REFERENCE_CITIES, get_reference_city
from .core.config import settings
from .core.exceptions import StoreError, ValidationError
from .core.models import BuildingDesign, ORIENTATIONS
from .db.seed import initialize_database
from .utils.logging_config import ensure_logging
from .utils.validation import validate_building_design

app = typer.Typer(
    name="facade-energy",
    help="Facade Energy - Heat gain and cooling energy analysis for building designs",
    add_completion=False,
)
console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _load_designs(input_file: Path) -> List[BuildingDesign]:
    """Read one design or a list of designs from a JSON file."""
    try:
        data = json.loads(input_file.read_text())
    except FileNotFoundError:
        _fail(f"File not found: {input_file}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON in {input_file}: {e}")

    items = data if isinstance(data, list) else [data]
    try:
        return [validate_building_design(item) for item in items]
    except ValidationError as e:
        _fail(str(e))


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
):
    ensure_logging(log_level)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload/--no-reload", help="Auto-reload on code changes"),
):
    """Start the REST API server."""
    from .api.main import main as run_api

    console.print(Panel.fit(
        "[bold blue]Facade Energy API[/bold blue]\n"
        f"http://{host or settings.api_host}:{port or settings.api_port}/docs",
        border_style="blue"
    ))
    run_api(host=host, port=port, reload=reload)


@app.command()
def seed(
    force: bool = typer.Option(False, "--force", help="Replace existing city data"),
):
    """Seed the document store with the reference cities."""
    try:
        count = initialize_database(force=force)
    except StoreError as e:
        _fail(str(e))

    if count:
        console.print(f"[green]Seeded {count} cities[/green]")
    else:
        console.print("[yellow]City data already present; use --force to replace it[/yellow]")


@app.command()
def cities():
    """Show the reference city data."""
    table = Table(title="Reference Cities")
    table.add_column("City", style="cyan")
    for key in ORIENTATIONS + ("roof",):
        table.add_column(key.title(), justify="right")
    table.add_column("Rate (Rs/kWh)", justify="right")

    for city in REFERENCE_CITIES:
        radiation = city.solar_radiation
        table.add_row(
            city.name,
            *[f"{radiation.for_orientation(key):.0f}" for key in ORIENTATIONS + ("roof",)],
            f"{city.electricity_rate:.2f}",
        )
    console.print(table)


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Building design JSON file"),
    city: str = typer.Option(..., "--city", "-c", help="City name"),
    season: Optional[str] = typer.Option(None, "--season", "-s", help="summer, winter or monsoon"),
    hour: Optional[int] = typer.Option(None, "--hour", help="Hour of day (0-23)"),
):
    """
    Analyze heat gain and cooling energy of each design in a file.

    Without --season or --hour the peak (full sun) estimate is shown.
    """
    designs = _load_designs(input_file)
    calculator = EnergyCalculator()

    try:
        city_data = get_reference_city(city)
        results = [calculator.analyze(d, city_data, season=season, hour=hour) for d in designs]
    except ValidationError as e:
        _fail(str(e))

    table = Table(title=f"Cooling Energy - {city_data.name}")
    table.add_column("Design", style="cyan")
    for orientation in ORIENTATIONS:
        table.add_column(orientation.title(), justify="right")
    table.add_column("Skylight", justify="right")
    table.add_column("Total (BTU)", justify="right")
    table.add_column("Energy (kWh)", justify="right")
    table.add_column("Cost (Rs)", justify="right", style="green")
    table.add_column("CO2 (t)", justify="right")
    table.add_column("Peak (kWh)", justify="right")

    for result in results:
        gain = result.heat_gain
        table.add_row(
            result.name,
            f"{gain.north:,.0f}",
            f"{gain.south:,.0f}",
            f"{gain.east:,.0f}",
            f"{gain.west:,.0f}",
            f"{gain.skylight:,.0f}",
            f"{gain.total:,.0f}",
            f"{result.energy_consumption:.3f}",
            f"{result.cooling_cost:.2f}",
            f"{carbon_emissions(result.energy_consumption):.5f}",
            f"{peak_demand(result.energy_consumption):.3f}",
        )
    console.print(table)


@app.command()
def profile(
    input_file: Path = typer.Argument(..., help="Building design JSON file"),
    city: str = typer.Option(..., "--city", "-c", help="City name"),
    season: str = typer.Option("summer", "--season", "-s", help="summer, winter or monsoon"),
    orientation_weighting: bool = typer.Option(
        False, "--orientation-weighting/--no-orientation-weighting",
        help="Scale facades by time-of-day orientation factors",
    ),
):
    """Show the 24-hour energy profile of the first design in a file."""
    design = _load_designs(input_file)[0]

    try:
        daily = EnergyCalculator().daily_profile(
            design,
            get_reference_city(city),
            season=season,
            orientation_weighting=orientation_weighting,
        )
    except ValidationError as e:
        _fail(str(e))

    table = Table(title=f"{daily.name} - {daily.city}, {daily.season.value}")
    table.add_column("Hour", justify="right")
    table.add_column("Sun", justify="right")
    table.add_column("Heat gain (BTU)", justify="right")
    table.add_column("Energy (kWh)", justify="right")
    table.add_column("Cost (Rs)", justify="right", style="green")

    for hourly in daily.hours:
        style = "bold yellow" if hourly.hour == daily.peak_hour else None
        table.add_row(
            f"{hourly.hour:02d}:00",
            f"{hourly.sunlight_factor:.2f}",
            f"{hourly.heat_gain:,.0f}",
            f"{hourly.energy_consumption:.3f}",
            f"{hourly.cost:.2f}",
            style=style,
        )
    console.print(table)
    console.print(
        f"\n[bold]Daily total:[/bold] {daily.total_energy_consumption:.2f} kWh, "
        f"Rs {daily.total_cost:.2f} (peak at {daily.peak_hour:02d}:00)"
    )


@app.command()
def rank(
    input_file: Path = typer.Argument(..., help="JSON file with a list of designs"),
    city: str = typer.Option(..., "--city", "-c", help="City name"),
    season: Optional[str] = typer.Option(None, "--season", "-s", help="summer, winter or monsoon"),
):
    """Rank designs by midday cooling cost, cheapest first."""
    designs = _load_designs(input_file)

    try:
        rankings = rank_designs(designs, get_reference_city(city), season=season)
    except ValidationError as e:
        _fail(str(e))

    table = Table(title=f"Design Ranking - {city.title()}")
    table.add_column("#", justify="right")
    table.add_column("Design", style="cyan")
    table.add_column("Heat gain (BTU)", justify="right")
    table.add_column("Energy (kWh)", justify="right")
    table.add_column("Cost (Rs)", justify="right", style="green")

    for ranking in rankings:
        table.add_row(
            str(ranking.rank),
            ranking.name,
            f"{ranking.total_heat_gain:,.0f}",
            f"{ranking.energy_consumption:.3f}",
            f"{ranking.cost:.2f}",
        )
    console.print(table)


if __name__ == "__main__":
    app()
