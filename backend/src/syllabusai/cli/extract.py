"""Extraction CLI commands.

Each command reads UTF-8 text from a file (or '-' for stdin).
"""

import json
import sys

import click

from ..exceptions import ExtractionError
from ..extraction import get_extraction_orchestrator
from ..models import ExtractionCategory, ExtractionResult
from ..service import build_overview, get_syllabus_processor

CATEGORY_CHOICES = [c.value for c in ExtractionCategory]


def _print_result(result: ExtractionResult) -> None:
    if ExtractionCategory.TOPICS in result.strategies_used:
        click.echo(f"Topics ({len(result.topics)}):")
        for topic in result.topics:
            click.echo(f"  Week {topic.week}: {topic.title} [{topic.difficulty_level.value}]")
        click.echo("")

    if ExtractionCategory.DEADLINES in result.strategies_used:
        click.echo(f"Deadlines ({len(result.deadlines)}):")
        for deadline in result.deadlines:
            click.echo(
                f"  {deadline.date:%Y-%m-%d %H:%M} {deadline.type.value:<10} {deadline.title}"
            )
        click.echo("")

    if ExtractionCategory.MATERIALS in result.strategies_used:
        click.echo(f"Materials ({len(result.materials)}):")
        for material in result.materials:
            link = f" <{material.link}>" if material.link else ""
            click.echo(f"  {material.type.value:<9} {material.title}{link}")
        click.echo("")

    for category, strategy in result.strategies_used.items():
        click.echo(f"{category.value}: {strategy or 'nothing found'}")


@click.command("extract")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option(
    "--category",
    "-c",
    "categories",
    multiple=True,
    type=click.Choice(CATEGORY_CHOICES),
    help="Category to extract (repeatable, default: all)",
)
@click.option(
    "--difficulty/--no-difficulty",
    default=None,
    help="Re-rate topic difficulty with the AI service",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def extract_command(
    source,
    categories: tuple[str, ...],
    difficulty: bool | None,
    as_json: bool,
) -> None:
    """Extract topics, deadlines and materials from SOURCE."""
    text = source.read()
    requested = [ExtractionCategory(c) for c in categories] or None

    processor = get_syllabus_processor(enable_difficulty=difficulty)
    try:
        result = processor.process(text, requested)
    except ExtractionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        _print_result(result)


@click.command("analyze")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def analyze_command(source, as_json: bool) -> None:
    """Show how each strategy rates SOURCE."""
    text = source.read()
    orchestrator = get_extraction_orchestrator()
    analysis = orchestrator.analyze_strategies(text)

    if as_json:
        click.echo(json.dumps(analysis.model_dump(mode="json"), indent=2))
        return

    click.echo(f"Content length: {analysis.content_length} characters")
    click.echo("")
    click.echo(f"  {'Strategy':<28} {'Priority':>8} {'Supported':>10} {'Confidence':>11}")
    for info in analysis.strategies:
        click.echo(
            f"  {info.name:<28} {info.priority:>8} "
            f"{'yes' if info.supported else 'no':>10} {info.confidence:>10}%"
        )

    try:
        selected = orchestrator.select_best_strategy(text)
    except ExtractionError as e:
        click.echo(f"\nNo strategy selected: {e}")
        sys.exit(1)
    click.echo(f"\nSelected: {selected.name}")


@click.command("overview")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def overview_command(source, as_json: bool) -> None:
    """Summarize the extraction result for SOURCE."""
    text = source.read()
    processor = get_syllabus_processor()
    try:
        result = processor.process(text)
    except ExtractionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    overview = build_overview(result)

    if as_json:
        click.echo(json.dumps(overview.model_dump(mode="json"), indent=2))
        return

    click.echo(f"Total weeks: {overview.total_weeks}")
    click.echo(
        f"Topics: {overview.topic_count}  Deadlines: {overview.deadline_count}  "
        f"Materials: {overview.material_count}"
    )
    distribution = ", ".join(
        f"{level.value.title()}: {count}"
        for level, count in overview.difficulty_distribution.items()
    )
    click.echo(f"Difficulty - {distribution}")
    click.echo("Upcoming deadlines:")
    for deadline in overview.upcoming_deadlines:
        click.echo(f"  {deadline.date:%Y-%m-%d} {deadline.title}")
