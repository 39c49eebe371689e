"""Allow ``python -m walrus_starter``."""

from walrus_starter.cli import main

main()
