from opencov.cli.entry import cli
from opencov.cli.errors import EXIT_CONFIG, EXIT_DATAERR, EXIT_GENERIC, EXIT_NOINPUT, EXIT_OK

__all__ = ["EXIT_CONFIG", "EXIT_DATAERR", "EXIT_GENERIC", "EXIT_NOINPUT", "EXIT_OK", "cli"]
