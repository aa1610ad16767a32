"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3


class Commands(Enum):
    """Per-plugin commands understood by the CLI.

    Args:
        Enum (string): Command names as typed on the command line.
    """

    INSTALL = "install"
    UNINSTALL = "uninstall"
    LIST = "list"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_PYPI = "https://pypi.org/pypi/"
    SUPPORTED_COMMANDS = [
        Commands.INSTALL.value,
        Commands.UNINSTALL.value,
        Commands.LIST.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVEL_ENV = "PLUGVEND_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Resolution target, overridable via config file, env or CLI
    DEFAULT_RUNTIME_VERSION = "3.10"
    DEFAULT_PLATFORM = "win_amd64"
    DEFAULT_VENDOR_ROOT = "vendor"

    # Artifact naming
    WHEEL_EXTENSION = ".whl"
    UNIVERSAL_PLATFORM = "any"
    GENERIC_PYTHON_TAG = "py3"
    DIST_INFO_SUFFIX = ".dist-info"
    TEMP_ARCHIVE_SUFFIX = ".zip"

    # Environment overrides
    ENV_RUNTIME_VERSION = "PLUGVEND_RUNTIME_VERSION"
    ENV_PLATFORM = "PLUGVEND_PLATFORM"
    ENV_INDEX_URL = "PLUGVEND_INDEX_URL"
    ENV_VENDOR_ROOT = "PLUGVEND_VENDOR_ROOT"
    CONFIG_SECTION = "plugvend"

    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300
    DOWNLOAD_CHUNK_SIZE = 64 * 1024
