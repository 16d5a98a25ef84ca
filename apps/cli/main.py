"""CLI application for depscout."""

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from depscout.client import AnalysisClient
from depscout.config import load_settings
from depscout.detect import Detector
from depscout.errors import (
    DepscoutError,
    NoDependenciesFoundError,
    NoFilesDetectedError,
)
from depscout.logging import setup_logging
from depscout.models import DetectedFile, ParsedDependencies, ProjectStructure
from depscout.parse import parse_file, to_ecosystem
from depscout.registry import REGISTRY

console = Console()

SEVERITIES = ("critical", "high", "medium", "low")


def format_detected_table(files: list[DetectedFile], root: Path) -> Table:
    """Build a table of detected files."""
    table = Table(title="Detected dependency files")
    table.add_column("File")
    table.add_column("Ecosystem")
    table.add_column("Type")
    table.add_column("Confidence", justify="right")
    for detected in files:
        try:
            shown = str(detected.path.relative_to(root))
        except ValueError:
            shown = str(detected.path)
        table.add_row(shown, str(detected.ecosystem), str(detected.type), f"{detected.confidence:.0%}")
    return table


def format_detected_json(files: list[DetectedFile], structure: ProjectStructure) -> str:
    """Format JSON output for detection results."""
    return json.dumps(
        {
            "files": [detected.to_dict() for detected in files],
            "structure": {
                "is_monorepo": structure.is_monorepo,
                "root_ecosystem": structure.root_ecosystem,
                "total_files": structure.total_files,
                "subprojects": [
                    {"path": str(sub.path), "ecosystem": str(sub.ecosystem), "files": sub.file_count}
                    for sub in structure.subprojects
                ],
            },
        },
        indent=2,
    )


def format_dependency_table(parsed: ParsedDependencies) -> Table:
    """Build a table of parsed dependencies."""
    table = Table(title=f"{parsed.source_file.name} ({parsed.ecosystem})")
    table.add_column("Name")
    table.add_column("Version")
    for dep in parsed.dependencies:
        table.add_row(dep.name, dep.version)
    return table


def summarize_vulnerabilities(results: dict) -> dict[str, int]:
    """Count vulnerabilities per severity in an analysis response."""
    summary = results.get("summary")
    if isinstance(summary, dict):
        return {severity: int(summary.get(severity, 0)) for severity in SEVERITIES}

    counts = dict.fromkeys(SEVERITIES, 0)
    for dep in results.get("dependencies", []):
        for vuln in dep.get("vulnerabilities", []):
            severity = vuln.get("severity")
            if severity in counts:
                counts[severity] += 1
    return counts


def format_analysis_table(results: dict, min_severity: str | None = None) -> Table:
    """Build a table of vulnerable dependencies."""
    allowed = SEVERITIES[: SEVERITIES.index(min_severity) + 1] if min_severity else SEVERITIES
    table = Table(title="Vulnerabilities")
    table.add_column("Dependency")
    table.add_column("Version")
    table.add_column("ID")
    table.add_column("Severity")
    table.add_column("Title")
    for dep in results.get("dependencies", []):
        for vuln in dep.get("vulnerabilities", []):
            if vuln.get("severity") not in allowed:
                continue
            table.add_row(
                dep.get("name", ""),
                dep.get("version", ""),
                vuln.get("id", ""),
                vuln.get("severity", ""),
                vuln.get("title", ""),
            )
    return table


def build_report(parsed: ParsedDependencies, response: dict, project_path: Path, duration_ms: int) -> dict:
    """Assemble the JSON report written after an analysis run."""
    results = response.get("results") or {}
    return {
        "metadata": {
            "scan_timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": response.get("request_id"),
            "project_path": str(project_path),
            "source_file": str(parsed.source_file),
            "ecosystem": str(parsed.ecosystem),
            "total_dependencies": len(parsed.dependencies),
            "scan_duration_ms": duration_ms,
        },
        "summary": summarize_vulnerabilities(results),
        "dependencies": results.get("dependencies", []),
    }


def resolve_target(
    detector: Detector, file_path: str | None, ecosystem: str | None
) -> tuple[Path, str]:
    """Pick the manifest to analyze: the explicit file, or the best detected one."""
    if file_path:
        detected = detector.detect_file(file_path)
        if detected is None and not ecosystem:
            raise DepscoutError(f"Could not detect ecosystem for file: {file_path}")
        path = detected.path if detected else Path(file_path).resolve()
        return path, ecosystem or detected.ecosystem

    detected_files = detector.detect_files()
    if not detected_files:
        raise NoFilesDetectedError(detector.project_path, detector.max_depth)

    best = detector.get_best_file(detected_files, ecosystem)
    return best.path, ecosystem or best.ecosystem


app = typer.Typer(
    name="depscout",
    help="depscout - Detect dependency manifests and analyze them for vulnerabilities",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """depscout - Detect dependency manifests and analyze them for vulnerabilities."""
    setup_logging(level="DEBUG" if verbose else None)


@app.command()
def detect(
    path: str = typer.Argument(".", help="Project directory to scan"),
    max_depth: int | None = typer.Option(None, "--max-depth", help="Maximum directory depth"),
    format_type: str = typer.Option("table", "--format", help="Output format: table, json"),
) -> None:
    """List dependency files found in a project, best candidates first."""
    try:
        settings = load_settings(cwd=Path(path))
        detector = Detector(path, max_depth=settings.max_depth if max_depth is None else max_depth)
        files = detector.detect_files()
        structure = detector.detect_project_structure(files)

        if format_type == "json":
            console.print_json(format_detected_json(files, structure))
            return

        if not files:
            raise NoFilesDetectedError(detector.project_path, detector.max_depth)

        console.print(format_detected_table(files, detector.project_path))
        if structure.is_monorepo:
            console.print(f"Monorepo with {len(structure.subprojects)} subprojects:")
            for sub in structure.subprojects:
                console.print(f"  {sub.path} ({detector.display_name(sub.ecosystem)}, {sub.file_count} files)")

    except DepscoutError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def parse(
    file_path: str = typer.Argument(help="Manifest file to parse"),
    ecosystem: str | None = typer.Option(None, "--ecosystem", "-e", help="Force specific ecosystem"),
    format_type: str = typer.Option("table", "--format", help="Output format: table, json"),
) -> None:
    """Parse a single manifest and print its dependencies."""
    try:
        if ecosystem:
            to_ecosystem(ecosystem)
        detector = Detector()
        path, resolved_ecosystem = resolve_target(detector, file_path, ecosystem)
        parsed = parse_file(path, resolved_ecosystem)

        if format_type == "json":
            console.print_json(json.dumps(parsed.to_dict()))
        elif not parsed.dependencies:
            console.print("No dependencies found")
        else:
            console.print(format_dependency_table(parsed))

    except DepscoutError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)


@app.command("test")
def run_test(
    file_path: str | None = typer.Option(None, "--file", "-f", help="Dependency file to analyze"),
    ecosystem: str | None = typer.Option(None, "--ecosystem", "-e", help="Force specific ecosystem"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format: table, json, summary"),
    severity: str | None = typer.Option(None, "--severity", "-s", help="Minimum severity to show"),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="API key for increased rate limits"),
    timeout: float | None = typer.Option(None, "--timeout", "-t", help="Request timeout in seconds"),
    max_depth: int | None = typer.Option(None, "--max-depth", help="Maximum directory depth"),
    no_report: bool = typer.Option(False, "--no-report", help="Skip writing the JSON report"),
) -> None:
    """Analyze project dependencies for vulnerabilities."""
    try:
        if ecosystem:
            to_ecosystem(ecosystem)
        if severity and severity not in SEVERITIES:
            raise DepscoutError(f"Unsupported severity: {severity}")

        settings = load_settings()
        output_format = output or settings.output_format
        if output_format not in ("table", "json", "summary"):
            raise DepscoutError(f"Unsupported output format: {output_format}")

        detector = Detector(max_depth=settings.max_depth if max_depth is None else max_depth)
        path, resolved_ecosystem = resolve_target(detector, file_path, ecosystem)
        if output_format != "json":
            console.print(f"Analyzing {path} ({detector.display_name(resolved_ecosystem)})")

        parsed = parse_file(path, resolved_ecosystem)
        if not parsed.dependencies:
            raise NoDependenciesFoundError(path.name)

        client = AnalysisClient(
            settings.api_url,
            api_key=api_key or settings.api_key,
            timeout=timeout or settings.timeout,
        )
        started = datetime.now(timezone.utc)
        response = asyncio.run(client.analyze(parsed))
        duration_ms = int((datetime.now(timezone.utc) - started).total_seconds() * 1000)

        if response.get("status") == "error":
            raise DepscoutError(f"Analysis failed: {response.get('message') or response.get('error')}")

        results = response.get("results") or {}
        counts = summarize_vulnerabilities(results)

        if output_format == "json":
            console.print_json(json.dumps(response))
        elif output_format == "summary":
            console.print(f"{len(parsed.dependencies)} dependencies scanned")
            console.print(", ".join(f"{name}: {count}" for name, count in counts.items()))
        else:
            console.print(format_analysis_table(results, severity))
            console.print(", ".join(f"{name}: {count}" for name, count in counts.items()))

        if settings.generate_report and not no_report:
            report = build_report(parsed, response, detector.project_path, duration_ms)
            try:
                Path(settings.report_filename).write_text(json.dumps(report, indent=2))
            except OSError as e:
                raise DepscoutError(f"Could not write report to {settings.report_filename}", cause=e) from e
            if output_format != "json":
                console.print(f"Report written to {settings.report_filename}")

    except DepscoutError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)


@app.command()
def ping() -> None:
    """Test connectivity to the analysis API."""
    settings = load_settings()
    client = AnalysisClient(settings.api_url, api_key=settings.api_key, timeout=settings.timeout)
    try:
        health = asyncio.run(client.health_check())
    except DepscoutError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)
    console.print(f"API at {settings.api_url} is {health.get('status', 'unknown')}")


@app.command()
def info() -> None:
    """Show API information and locally supported ecosystems."""
    settings = load_settings()
    client = AnalysisClient(settings.api_url, api_key=settings.api_key, timeout=settings.timeout)
    try:
        api_info = asyncio.run(client.get_info())
    except DepscoutError as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(1)

    console.print(f"{api_info.get('name', 'API')} {api_info.get('version', '')}".strip())
    if api_info.get("description"):
        console.print(api_info["description"])
    console.print("Supported ecosystems:")
    for definition in REGISTRY:
        console.print(f"  {definition.name} ({definition.display_name})")


if __name__ == "__main__":
    app()
