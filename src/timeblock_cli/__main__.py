"""Allow ``python -m timeblock_cli``."""

from timeblock_cli.main import main

main()
