"""Allow ``python -m modelwatch``."""

from .cli.main import main

main()
