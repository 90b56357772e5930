"""Logging configuration for the clipsync CLI."""
import logging


def configure_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity setting.

    Args:
        verbose: If True, log clipsync and websockets at DEBUG; otherwise
            only warnings and errors are shown.

    Clipboard content only ever appears in logs as a truncated preview.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
    # websockets logs every frame at DEBUG
    logging.getLogger("websockets").setLevel(level if verbose else logging.WARNING)
