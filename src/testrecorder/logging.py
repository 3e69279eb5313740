import logging
from rich.console import Console
from rich.logging import RichHandler
def setup_logging(level: str = "INFO"):
    # stderr, so diagnostics never interleave with recorder output on stdout.
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]",
                        handlers=[RichHandler(rich_tracebacks=True, console=Console(stderr=True))])
    return logging.getLogger("testrecorder")
