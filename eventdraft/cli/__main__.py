"""Allow ``python -m eventdraft.cli <url>`` execution."""

from eventdraft.cli.extract import main

main()
