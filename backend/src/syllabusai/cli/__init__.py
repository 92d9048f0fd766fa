"""CLI entry points for SyllabusAI.

Provides command-line tools for:
- Extracting topics, deadlines and materials from document text
- Inspecting strategy selection for a document
- Summarizing a document's extraction result
"""

import click

from .. import __version__
from ..logging import setup_logging
from .extract import analyze_command, extract_command, overview_command


@click.group()
@click.version_option(version=__version__, prog_name="syllabusai")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (default: WARNING)",
)
def main(log_level: str) -> None:
    """SyllabusAI - course document extraction.

    Reads plain text already extracted from a course document and
    turns it into topics, deadlines and learning materials.
    """
    setup_logging(log_level)


main.add_command(extract_command, name="extract")
main.add_command(analyze_command, name="analyze")
main.add_command(overview_command, name="overview")


if __name__ == "__main__":
    main()
