import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """configure process-wide logging to stdout"""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
