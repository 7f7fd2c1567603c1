import logging
import os

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0) -> None:
    """Configure the root logger for the command line entry point.

    ``-v`` selects INFO and ``-vv`` DEBUG. The DX_LOG_LEVEL env var, when set
    to a level name, wins over the verbosity count.
    """
    level = level_for_verbosity(verbosity)
    level_name = os.getenv("DX_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
