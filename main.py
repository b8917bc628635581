#!/usr/bin/env python3
"""InsightExtractor CLI - triage an insight and propose RICE-scored actions.

Usage:
    # Heuristic triage and action generation
    python main.py --text "Users say checkout is broken on mobile" --source user_feedback

    # With project context and a fixed seed for reproducible templates
    python main.py --input ./insight.txt --project ./project.json --seed 7

    # AI-backed triage and actions
    python main.py --input ./insight.txt --ai-triage --ai-actions --provider openai
"""

import json
import random
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config import configure_logging, settings
from contracts import InsightSource, ProjectContext, TriageStatus
from orchestrator import PipelineResult, build_pipeline
from providers import list_providers as get_available_providers

console = Console()

STATUS_STYLES = {
    TriageStatus.PASSED: "green",
    TriageStatus.RESEARCH_NEEDED: "yellow",
    TriageStatus.REJECTED: "red",
    TriageStatus.PENDING: "dim",
}


def load_project(project_path: str) -> ProjectContext:
    """Load project context from a JSON file (camelCase or snake_case keys).

    Raises:
        click.BadParameter: If the file is not valid JSON or not a valid project
    """
    try:
        data = json.loads(Path(project_path).read_text(encoding="utf-8"))
        return ProjectContext.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise click.BadParameter(f"Invalid project file: {e}", param_hint="--project")


def render_result(result: PipelineResult) -> None:
    triage = result.triage
    style = STATUS_STYLES[triage.triage_status]

    console.print("\n[bold]Triage Result:[/bold]")
    console.print(f"  [green]Clarity:[/green] {triage.clarity.value}")
    console.print(f"  [green]Impact:[/green] {triage.impact.value}")
    console.print(f"  [green]Score:[/green] {triage.score}")
    console.print(f"  [green]Status:[/green] [{style}]{triage.triage_status.value}[/{style}]")
    console.print(f"  [green]State:[/green] {result.state.value}")
    if triage.fallback:
        console.print("  [yellow]AI triage failed; fallback result used[/yellow]")
    console.print(Panel(triage.explanation or "-", title="Explanation", border_style="dim"))

    if result.rice:
        rice = result.rice
        console.print(
            f"\n[bold]RICE:[/bold] reach={rice.reach} impact={rice.impact} "
            f"confidence={rice.confidence} effort={rice.effort} "
            f"priority={rice.priority_score}"
        )

    if not result.generation:
        return

    table = Table(title="Candidate Actions")
    table.add_column("Domain", style="cyan")
    table.add_column("Description")
    table.add_column("R", justify="right")
    table.add_column("I", justify="right")
    table.add_column("C", justify="right")
    table.add_column("E", justify="right")
    table.add_column("Priority score", justify="right")
    table.add_column("Persisted score", justify="right", style="bold")
    for candidate, record in zip(result.generation.actions, result.actions):
        scoring = candidate.rice_scoring
        table.add_row(
            candidate.domain,
            candidate.description,
            f"{scoring.reach:g}",
            f"{scoring.impact:g}",
            f"{scoring.confidence:g}",
            f"{scoring.effort:g}",
            f"{scoring.priority_score:g}",
            str(record.priority_score),
        )
    console.print()
    console.print(table)

    generation = result.generation
    if generation.category_area:
        console.print(f"[green]Category area:[/green] {generation.category_area}")
    console.print(f"[green]Reasoning:[/green] {generation.full_reasoning}")
    if generation.key_insights:
        console.print(f"[green]Key insights:[/green] {', '.join(generation.key_insights)}")
    if generation.potential_challenges:
        console.print(f"[green]Challenges:[/green] {', '.join(generation.potential_challenges)}")


@click.command()
@click.option(
    "--text", "-t",
    default=None,
    help="Insight text"
)
@click.option(
    "--input", "-i", "input_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read the insight text from a file"
)
@click.option(
    "--source", "-s",
    type=click.Choice([s.value for s in InsightSource]),
    default=InsightSource.USER_FEEDBACK.value,
    help="Where the insight came from (default: user_feedback)"
)
@click.option(
    "--project", "-P", "project_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Project context JSON file"
)
@click.option(
    "--ai-triage",
    is_flag=True,
    help="Use the AI-backed triage classifier (default: settings)"
)
@click.option(
    "--ai-actions",
    is_flag=True,
    help="Use the AI-backed action generator (default: settings)"
)
@click.option(
    "--provider", "-p",
    type=click.Choice(["anthropic", "openai", "deepseek"]),
    default=None,
    help=f"LLM provider (default: {settings.ai_provider})"
)
@click.option(
    "--model",
    default=None,
    help="Model name (e.g., claude-3-5-haiku-20241022, gpt-4o-mini, deepseek-chat)"
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Seed for template and domain selection"
)
@click.option(
    "--triage-only",
    is_flag=True,
    help="Stop after triage"
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print the pipeline result as JSON"
)
@click.option(
    "--list-providers",
    is_flag=True,
    help="List available providers and exit"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Verbose output"
)
def main(
    text: Optional[str],
    input_path: Optional[str],
    source: str,
    project_path: Optional[str],
    ai_triage: bool,
    ai_actions: bool,
    provider: Optional[str],
    model: Optional[str],
    seed: Optional[int],
    triage_only: bool,
    as_json: bool,
    list_providers: bool,
    verbose: bool,
):
    """InsightExtractor: triage product insights and propose prioritized actions."""
    configure_logging("DEBUG" if verbose else None)

    if list_providers:
        console.print("[bold]Available LLM Providers:[/bold]\n")
        for name, available in get_available_providers().items():
            status = "[green]✓ Ready[/green]" if available else "[red]✗ No API key[/red]"
            console.print(f"  {name:12} {status}")
        console.print("\n[dim]Set API keys via environment variables:[/dim]")
        console.print("  ANTHROPIC_API_KEY, OPENAI_API_KEY, DEEPSEEK_API_KEY")
        return

    if input_path:
        text = Path(input_path).read_text(encoding="utf-8", errors="replace")
    if not text or not text.strip():
        console.print("[red]Error: provide insight text with --text or --input[/red]")
        sys.exit(1)

    project = load_project(project_path) if project_path else None

    try:
        pipeline = build_pipeline(
            use_ai_triage=ai_triage or None,
            use_ai_actions=ai_actions or None,
            provider=provider,
            model=model,
            rng=random.Random(seed) if seed is not None else None,
        )
        result = pipeline.process(text, source, project, generate=not triage_only)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return

    console.print(Panel.fit(
            "[bold blue]InsightExtractor[/bold blue]\n"
            "[dim]Insight triage and RICE action scoring[/dim]",
            border_style="blue"
    ))
    render_result(result)

    usage = [
        component.total_usage
        for component in (pipeline.classifier, pipeline.generator)
        if hasattr(component, "total_usage")
    ]
    if usage:
        input_tokens = sum(u.input_tokens for u in usage)
        output_tokens = sum(u.output_tokens for u in usage)
        console.print("\n[bold]Cost Summary:[/bold]")
        console.print(f"  Input tokens:  {input_tokens:,}")
        console.print(f"  Output tokens: {output_tokens:,}")
        console.print(f"  Total cost:    ${settings.calculate_cost(input_tokens, output_tokens):.4f}")


if __name__ == "__main__":
    main()
