"""Allow running the CLI with ``python -m media_matcher.cli``."""

from .main import main

main()
