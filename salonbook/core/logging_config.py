"""Console logging setup for the ``salonbook`` logger tree."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single console handler to the package logger.

    Call once at startup. Existing handlers are cleared so reconfiguring
    (e.g. in tests) does not duplicate output.
    """
    root = logging.getLogger("salonbook")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)
    root.propagate = False
