"""
Command-line interface for binroute using Typer.
"""

import dataclasses
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from binroute import __version__
from binroute.config import (
    BinrouteParams,
    RuntimeParams,
    default_params,
    load_binroute_params,
)
from binroute.core_types import Bin, Route
from binroute.demo import available_demos, load_demo
from binroute.fleet_state import FleetState
from binroute.history import compare_routes, route_efficiency, summarize
from binroute.prediction import predict_fill_levels
from binroute.simulation import SimulationScheduler
from binroute.utils.data_processing import load_bins, load_trucks
from binroute.utils.logging import (
    ProgressTracker,
    log_error,
    log_progress,
    log_success,
    setup_logging,
)
from binroute.utils.save_results import export_state, save_routes

app = typer.Typer(
    help="binroute: waste collection route planner for bin pickups",
    add_completion=False,
)
console = Console()


def _setup_logging_from_flags(verbose: bool, quiet: bool, debug: bool) -> RuntimeParams:
    """Configure logging from the verbosity flags and return them as runtime params."""
    runtime = RuntimeParams(verbose=verbose or debug, debug=debug, quiet=quiet)
    setup_logging(runtime.log_level())
    return runtime


def _load_params(
    config: Optional[Path],
    threshold: Optional[float] = None,
    output_dir: Optional[Path] = None,
    format: Optional[str] = None,
    runtime: Optional[RuntimeParams] = None,
) -> BinrouteParams:
    """Config file (or packaged defaults) with command-line overrides applied."""
    params = load_binroute_params(config) if config else default_params()
    if runtime is not None:
        params = dataclasses.replace(params, runtime=runtime)
    if threshold is not None:
        params = dataclasses.replace(
            params,
            routing=dataclasses.replace(
                params.routing, high_priority_threshold=threshold
            ),
        )
    if output_dir is not None or format is not None:
        params = dataclasses.replace(
            params,
            io=dataclasses.replace(
                params.io,
                results_dir=output_dir or params.io.results_dir,
                format=format or params.io.format,
            ),
        )
    return params


def _routes_table(routes: List[Route]) -> Table:
    table = Table(title="Truck Routes", show_header=True)
    table.add_column("Truck", style="cyan")
    table.add_column("Bin Sequence")
    table.add_column("Bins", justify="right")
    table.add_column("Distance (km)", justify="right")
    table.add_column("Waste (kg)", justify="right")
    table.add_column("kg/km", justify="right")
    for route, stats in zip(routes, route_efficiency(routes)):
        table.add_row(
            str(route.truck_id),
            " → ".join(str(b) for b in route.bin_sequence),
            str(len(route.bin_sequence)),
            f"{route.total_distance:.2f}",
            f"{route.total_waste_collected:.0f}",
            f"{stats.efficiency:.2f}",
        )
    return table


def _predictions_table(bins: List[Bin], threshold: float) -> Table:
    predictions = predict_fill_levels(bins)
    table = Table(title="Predicted Fill Levels (24h)", show_header=True)
    table.add_column("Bin", style="cyan")
    table.add_column("Current %", justify="right")
    table.add_column("Predicted %", justify="right")
    for b in bins:
        predicted = predictions[b.bin_id]
        style = "red" if predicted > threshold else ""
        table.add_row(
            str(b.bin_id),
            f"{b.fill_level:.0f}",
            f"[{style}]{predicted:.1f}[/{style}]" if style else f"{predicted:.1f}",
        )
    return table


def _run_and_report(state: FleetState, export: bool) -> None:
    steps = ["Build Graph & Clusters", "Sequence & Allocate", "Report"]
    progress = ProgressTracker(steps)

    progress.advance(f"Working set: {len(state.bins)} bins, {len(state.trucks)} trucks")
    result = state.calculate_routes()
    if result is None:
        progress.close()
        log_error("No routes generated: bins and trucks are required")
        raise typer.Exit(1)
    progress.advance(
        f"Generated {len(result.routes)} routes from {len(result.clusters)} clusters"
    )

    console.print(_routes_table(result.routes))
    summary = summarize(
        state.bins, state.trucks, state.routes, state.threshold, state.predictions
    )
    console.print(
        f"[bold]Total distance:[/bold] {summary.total_distance:.2f} km  "
        f"[bold]Waste:[/bold] {summary.total_waste:.0f} kg  "
        f"[bold]High priority bins:[/bold] {summary.high_priority_count}"
    )
    console.print(
        f"[bold]Efficiency:[/bold] {summary.efficiency:.2f} kg/km  "
        f"[bold]Utilisation:[/bold] {summary.capacity_utilization:.1f}%  "
        f"[bold]Fill bands:[/bold] {summary.high_priority_count} high / "
        f"{summary.medium_priority_count} medium / {summary.low_priority_count} low"
    )

    if export:
        path = export_state(state)
        progress.advance(f"Results saved to {path}")
    else:
        progress.advance()
    progress.close()


@app.command()
def optimize(
    bins: Path = typer.Option(..., "--bins", "-b", help="Bin file (CSV or JSON)"),
    trucks: Path = typer.Option(..., "--trucks", "-t", help="Truck file (CSV or JSON)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    threshold: Optional[float] = typer.Option(None, "--threshold", help="High-priority fill level (%)"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Results directory"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Export format: json or csv"),
    save: bool = typer.Option(True, "--save/--no-save", help="Write results to disk"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Compute collection routes for a bin set and a fleet."""
    runtime = _setup_logging_from_flags(verbose, quiet, debug)
    try:
        params = _load_params(config, threshold, output_dir, format, runtime)
        state = FleetState(params)
        state.set_bins(load_bins(bins))
        state.set_trucks(load_trucks(trucks))
    except (FileNotFoundError, ValueError) as e:
        log_error(str(e))
        raise typer.Exit(1)

    log_progress(f"Optimizing routes for {len(state.bins)} bins")
    _run_and_report(state, export=save)
    log_success("Route optimization complete")


@app.command()
def demo(
    name: str = typer.Argument("small", help="Demo size: small, medium or large"),
    export: bool = typer.Option(False, "--export", help="Write a JSON snapshot"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Results directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Load a built-in demo city and compute its routes."""
    runtime = _setup_logging_from_flags(verbose, quiet, debug)
    if name not in available_demos():
        log_error(f"Unknown demo '{name}'. Available: {', '.join(available_demos())}")
        raise typer.Exit(1)

    dataset = load_demo(name)
    params = _load_params(None, output_dir=output_dir, runtime=runtime)
    state = FleetState(params)
    state.set_bins(dataset.bins)
    state.set_trucks(dataset.trucks)

    console.print(f"[bold cyan]{dataset.name}[/bold cyan]: {dataset.description}")
    _run_and_report(state, export=export)


@app.command()
def predict(
    bins: Path = typer.Option(..., "--bins", "-b", help="Bin file (CSV or JSON)"),
    threshold: float = typer.Option(80.0, "--threshold", help="Highlight predictions above this level"),
) -> None:
    """Show predicted fill levels for the next day."""
    try:
        bin_list = load_bins(bins)
    except (FileNotFoundError, ValueError) as e:
        log_error(str(e))
        raise typer.Exit(1)
    console.print(_predictions_table(bin_list, threshold))


@app.command()
def lookup(
    bins: Path = typer.Option(..., "--bins", "-b", help="Bin file (CSV or JSON)"),
    bin_id: int = typer.Option(..., "--id", help="Bin id to look up"),
) -> None:
    """Find a bin by id through the bin index."""
    try:
        state = FleetState(default_params())
        state.set_bins(load_bins(bins))
    except (FileNotFoundError, ValueError) as e:
        log_error(str(e))
        raise typer.Exit(1)

    found = state.lookup_bin(bin_id)
    if found is None:
        console.print(f"[yellow]Bin #{bin_id} not found[/yellow]")
        raise typer.Exit(1)
    console.print(
        f"Bin #{found.bin_id} at [{found.latitude:.4f}, {found.longitude:.4f}] "
        f"fill {found.fill_level:.0f}% capacity {found.capacity:.0f}kg"
    )


@app.command()
def simulate(
    bins: Path = typer.Option(..., "--bins", "-b", help="Bin file (CSV or JSON)"),
    trucks: Path = typer.Option(..., "--trucks", "-t", help="Truck file (CSV or JSON)"),
    ticks: int = typer.Option(10, "--ticks", "-n", help="Number of simulation ticks"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    realtime: bool = typer.Option(False, "--realtime", help="Sleep tick_seconds between ticks"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Simulate bins filling up, rerouting when one turns high priority."""
    runtime = _setup_logging_from_flags(verbose, quiet, debug)
    try:
        params = _load_params(config, runtime=runtime)
        state = FleetState(params)
        state.set_bins(load_bins(bins))
        state.set_trucks(load_trucks(trucks))
    except (FileNotFoundError, ValueError) as e:
        log_error(str(e))
        raise typer.Exit(1)

    if not state.bins:
        log_error("Simulation needs at least one bin")
        raise typer.Exit(1)

    sim_params = params.simulation
    if seed is not None:
        sim_params = dataclasses.replace(sim_params, seed=seed)

    scheduler = SimulationScheduler(state, sim_params)
    results = scheduler.run(ticks, realtime=realtime)

    table = Table(title="Simulation", show_header=True)
    table.add_column("Tick", justify="right")
    table.add_column("Bin", style="cyan")
    table.add_column("Fill %", justify="right")
    table.add_column("Rerouted")
    for r in results:
        table.add_row(str(r.tick), str(r.bin_id), f"{r.fill_level:.0f}", "yes" if r.rerouted else "")
    console.print(table)

    if state.routes:
        console.print(_routes_table(state.routes))
        comparison = compare_routes(state.routes, state.previous_routes)
        console.print(
            f"Distance change vs previous run: {comparison.distance_diff:+.2f} km "
            f"({comparison.distance_percent:+.1f}%)"
        )
    log_success(f"{scheduler.tick_count} ticks, {scheduler.reroute_count} reroutes")


@app.command()
def version() -> None:
    """Show the binroute version."""
    console.print(f"binroute {__version__}")


def main():
    app()


if __name__ == "__main__":
    main()
