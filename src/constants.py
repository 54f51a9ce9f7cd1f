"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    USAGE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 4
    DECODE_ERROR = 5


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    USER_AGENT = "modpeek/0.1"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for a single HTTP request
    READ_CHUNK_SIZE = 8192  # Bytes per streamed read; the deadline is checked between reads
    DEFAULT_DEADLINE_SEC = 600  # Overall deadline for one command

    # Environment
    ENV_GOPROXY = "GOPROXY"
    ENV_LOG_LEVEL = "MODPEEK_LOG_LEVEL"
    ENV_CONFIG = "MODPEEK_CONFIG"

    # Version sources
    DEFAULT_GOPROXY = "https://proxy.golang.org,direct"
    GO_DL_URL = "https://go.dev/dl/?mode=json&include=all"
    NON_NETWORK_PROXIES = ("off", "direct")

    # Module identities
    STD_MODULE = "std"
    TEST_DOMAIN = "example.com/"
    GOLANG_DOMAIN = "golang.org/"

    # Repository locations
    GO_SOURCE_REPO_URL = "https://cs.opensource.google/go/go"
    GO_ISSUES_URL = "https://github.com/golang/go/issues"
    CS_GO_BASE = "https://cs.opensource.google/go"

    # Output
    TIME_FORMAT = "%b %Y %H:%M"  # preceded by the space padded day
