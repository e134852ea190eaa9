"""Allow ``python -m devbootstrap``."""

from devbootstrap.main import cli

cli()
