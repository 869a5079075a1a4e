"""CLI interface for siphon."""

import contextlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from siphon.analyzers import topic_for_command
from siphon.config import OUTPUT_FORMATS, load_config, merge_cli_overrides
from siphon.core import analyze
from siphon.errors import (
    EventSourceError,
    PipelineReport,
    UnknownTemplateError,
    load_report,
    save_report,
)
from siphon.formatters import (
    MarkdownFormatter,
    format_daily_entry,
    format_json,
    format_markdown,
    format_notion,
    format_prompt,
    format_rss,
    get_template,
    get_templates,
)
from siphon.models import AnalysisResult, Cluster
from siphon.parsers import load_events

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="siphon",
    help="Turn developer activity into topic clusters, struggle scores and content ideas.",
)

console = Console()
_stderr_console = Console(stderr=True)

_FORMAT_SUFFIXES = {
    "markdown": ".md",
    "notion": ".md",
    "daily": ".md",
    "json": ".json",
    "rss": ".xml",
    "prompt": ".txt",
}


@contextlib.contextmanager
def _progress_context(quiet: bool = False):
    """Yield a Progress context or a no-op depending on quiet flag."""
    if quiet:
        yield None
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=_stderr_console,
            transient=True,
        ) as progress:
            yield progress


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from siphon import __version__

        console.print(f"siphon {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log pipeline details to stderr."),
    ] = False,
) -> None:
    """Siphon - analyze developer activity."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _render_table(result: AnalysisResult) -> None:
    """Print a human-readable overview of the analysis."""
    summary = result.summary
    console.print()
    console.print("[bold]Siphon analysis[/bold]")
    if result.time_range:
        console.print(
            f"  {result.time_range.start:%Y-%m-%d %H:%M} → {result.time_range.end:%Y-%m-%d %H:%M}"
            f" ({result.time_range.duration_minutes} min)"
        )
    console.print(f"  Events: {summary.total_events}")
    console.print(f"  Commands: {summary.total_commands} ({summary.failed_commands} failed)")
    console.print(f"  Struggle score: {summary.struggle_score}%")
    console.print(
        f"  Sessions: {summary.session_count} (avg {summary.average_session_minutes} min)"
    )

    if result.clusters:
        table = Table(title="Clusters")
        table.add_column("Topic")
        table.add_column("Start")
        table.add_column("Minutes", justify="right")
        table.add_column("Events", justify="right")
        table.add_column("Confidence")
        table.add_column("Struggle", justify="right")
        table.add_column("Aha", justify="right")
        for cluster in result.clusters:
            table.add_row(
                cluster.topic,
                f"{cluster.start_time:%H:%M}",
                str(cluster.duration_minutes),
                str(cluster.event_count),
                cluster.confidence.value,
                str(cluster.struggle_score),
                str(cluster.aha_index),
            )
        console.print(table)

    if summary.aha_moments:
        console.print("[bold]Breakthroughs:[/bold]")
        for aha in summary.aha_moments:
            console.print(f"  - {aha.description} at {aha.timestamp:%H:%M}")

    if result.ideas:
        console.print("[bold]Content ideas:[/bold]")
        for idx, idea in enumerate(result.ideas, start=1):
            console.print(
                f"  {idx}. {idea.title} "
                f"[dim]({idea.suggested_format.value}, {idea.confidence.value})[/dim]"
            )
    else:
        console.print("[yellow]No content ideas yet. Keep working![/yellow]")


def _render(result: AnalysisResult, output_format: str, include_analysis: bool) -> str:
    if output_format == "markdown":
        return format_markdown(result, include_analysis=include_analysis)
    if output_format == "notion":
        return format_notion(result)
    if output_format == "daily":
        return format_daily_entry(result)
    if output_format == "json":
        return format_json(result, include_analysis=include_analysis)
    if output_format == "rss":
        return format_rss(result)
    return format_prompt(result)


def _find_cluster(result: AnalysisResult, topic: str) -> Cluster | None:
    """Return the longest cluster for *topic*, or None."""
    matches = [c for c in result.clusters if c.topic == topic]
    if not matches:
        return None
    return max(matches, key=lambda c: c.duration_minutes)


@app.command(name="analyze")
def analyze_cmd(
    events_file: Annotated[
        Path,
        typer.Argument(help="Event snapshot (.json or .jsonl) exported by the collectors."),
    ],
    output_format: Annotated[
        Optional[str],
        typer.Option(
            "--format",
            "-f",
            help="Output format: table, markdown, notion, daily, json, rss or prompt.",
        ),
    ] = None,
    template_name: Annotated[
        Optional[str],
        typer.Option(
            "--template",
            "-t",
            help="Fill a content template instead (see `siphon templates`).",
        ),
    ] = None,
    cluster_topic: Annotated[
        Optional[str],
        typer.Option("--cluster", help="Focus the template on the cluster with this topic."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the rendered output to this file."),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", help="Write the output into the configured output directory."),
    ] = False,
    include_analysis: Annotated[
        Optional[bool],
        typer.Option(
            "--include-analysis/--no-analysis",
            help="Include per-cluster and per-session details.",
        ),
    ] = None,
    cluster_gap: Annotated[
        Optional[int],
        typer.Option("--cluster-gap", help="Minutes of inactivity that split a cluster."),
    ] = None,
    session_gap: Annotated[
        Optional[int],
        typer.Option("--session-gap", help="Minutes of inactivity that split a session."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .siphon.toml config file."),
    ] = None,
) -> None:
    """Analyze an event snapshot and report clusters, sessions and ideas.

    Prints a summary table by default. Use --format to emit Markdown,
    a Notion page, a daily-note entry, JSON, RSS or a summarization
    prompt instead, or --template to fill a content draft. --output
    writes the result to a file and --save writes it into the
    configured output directory.
    """
    try:
        config = merge_cli_overrides(
            load_config(config_path),
            output_format=output_format,
            include_analysis=include_analysis,
            cluster_gap_minutes=cluster_gap,
            session_gap_minutes=session_gap,
        )
    except ValidationError as exc:
        console.print("[red]Error:[/red] Invalid configuration")
        for err in exc.errors():
            console.print(f"  {err['msg']}")
        raise typer.Exit(1)

    fmt = config.output.format
    if fmt not in OUTPUT_FORMATS:
        console.print(f"[red]Error:[/red] Unsupported format: {fmt}")
        console.print(f"Choose one of: {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(1)

    template = None
    if template_name is not None:
        try:
            template = get_template(template_name)
        except UnknownTemplateError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1)
    elif cluster_topic is not None:
        console.print("[red]Error:[/red] --cluster needs --template")
        raise typer.Exit(1)

    report = PipelineReport()
    try:
        events = load_events(events_file, report)
    except EventSourceError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    if report.errors:
        _stderr_console.print(
            f"[yellow]Warning: skipped {report.error_count} invalid record(s)[/yellow]"
        )
        for err in report.errors[:5]:
            _stderr_console.print(f"  - {err.message}")

    with _progress_context(quiet=fmt != "table" or template is not None) as progress:
        if progress:
            progress.add_task("Analyzing events...", total=None)
        result = analyze(events, settings=config.analysis, report=report)

    suffix = _FORMAT_SUFFIXES.get(fmt, ".md")
    if template is not None:
        cluster = None
        if cluster_topic is not None:
            cluster = _find_cluster(result, cluster_topic)
            if cluster is None:
                console.print(f"[red]Error:[/red] No cluster with topic: {cluster_topic}")
                raise typer.Exit(1)
        rendered = template.render(result, cluster)
        suffix = ".md"
    elif fmt == "table":
        _render_table(result)
        rendered = None
    else:
        rendered = _render(result, fmt, config.output.include_analysis)

    if output is None and save:
        output = Path(config.output.directory) / MarkdownFormatter().note_name(result)

    if output is not None:
        # The table view is terminal-only; files get the Markdown note instead
        if rendered is None:
            rendered = format_markdown(result, include_analysis=config.output.include_analysis)
        if not output.suffix:
            output = output.with_suffix(suffix)
        previous = load_report(output.parent)
        if previous is not None and previous.overwrites(output):
            _stderr_console.print(
                f"[yellow]Replacing {output} from the run started "
                f"{previous.started_at:%Y-%m-%d %H:%M}[/yellow]"
            )
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        report.outputs_written.append(str(output))
        report.finish()
        save_report(report, output.parent)
        _stderr_console.print(f"[green]Wrote {output}[/green]")
    else:
        report.finish()
        if rendered is not None:
            print(rendered)

    logger.info("Run report:\n%s", report.summary_text())


@app.command(name="templates")
def templates_cmd() -> None:
    """List the content templates usable with `siphon analyze --template`."""
    table = Table(title="Content templates")
    table.add_column("Name")
    table.add_column("Template")
    table.add_column("Description")
    for template in get_templates():
        table.add_row(template.name, template.label, template.description)
    console.print(table)


@app.command(name="topic")
def topic_cmd(
    command: Annotated[
        list[str],
        typer.Argument(help="Shell command to classify, e.g. 'kubectl get pods'."),
    ],
) -> None:
    """Show which topic a shell command is assigned to."""
    print(topic_for_command(" ".join(command)))


if __name__ == "__main__":
    app()
