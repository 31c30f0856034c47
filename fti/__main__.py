"""Allow ``python -m fti``."""

from .cli import run

run()
