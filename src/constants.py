"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    TOOL_MISSING = 3
    LIBRARY_ABSENT = 4
    VERSION_ERROR = 5
    INVALID_PRECISION = 6


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PKG_CONFIG_BINARY = "pkg-config"
    ENV_PKG_CONFIG = "FFTWPROBE_PKG_CONFIG"
    ENV_PKG_CONFIG_FALLBACK = "PKG_CONFIG"
    ENV_LOG_LEVEL = "FFTWPROBE_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"

    PACKAGE_BASE = "fftw3"
    # Order matters: it is the default resolution order.
    PRECISION_SUFFIXES = {
        "f": "f",
        "d": "",
        "l": "l",
        "q": "q",
    }
    DEFAULT_PRECISIONS = "fdlq"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    OUTPUT_FORMATS = ["json", "text"]
