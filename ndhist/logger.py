from typing import Any, Iterable, Optional
import json
import logging

from rich.console import Console
from rich.logging import RichHandler

LEVELS = ("INFO", "DEBUG")


class ModuleFilter(logging.Filter):
    """Pass records from ndhist and the given top-level modules only"""

    def __init__(self, modules: Optional[Iterable[str]] = None) -> None:
        super().__init__()
        self.modules = {"ndhist", *(modules or ())}

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.split(".")[0] in self.modules


class _FileRichHandler(RichHandler):
    """RichHandler owning the file its console writes to"""

    def close(self) -> None:
        try:
            self.console.file.close()
        finally:
            super().close()


def _rich_handler(filt: logging.Filter, console: Optional[Console] = None):
    handler_class = RichHandler if console is None else _FileRichHandler
    handler = handler_class(show_time=False, rich_tracebacks=True, console=console)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(filt)
    return handler


def setup_logger(
    level: str = "INFO",
    modules: Optional[Iterable[str]] = None,
    logfile: Optional[str] = None,
) -> logging.Logger:
    """Route ndhist log records to the terminal through rich.

    Histogram allocation and merging are reported at DEBUG level, which gets noisy
    when numerical libraries log too, so records from other packages are dropped
    unless their top-level module is listed in ``modules``.

    Parameters
    ----------
        level: str, optional
            Either INFO or DEBUG, defaults to INFO
        modules: list, optional
            Extra top-level modules whose records should be shown
        logfile: str, optional
            Also write the records to this file
    """
    if level not in LEVELS:
        raise ValueError(
            "Passed wrong level for the logger. Allowed levels are: {}".format(
                ", ".join(LEVELS)
            )
        )
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level))

    filt = ModuleFilter(modules)
    logger.addHandler(_rich_handler(filt))
    if logfile:
        logger.addHandler(_rich_handler(filt, Console(file=open(logfile, "wt"))))

    return logger


def json_str(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, indent=4)
