"""Allow running as ``python -m syllabusai``."""

from .cli import main

main()
