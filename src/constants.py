"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    NOT_FOUND = 1
    OUTDATED = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG_NAME = "latest"
    USER_AGENT = "latest-cli/0.1.0"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Cache
    CACHE_TTL_SEC = 3600  # fixed; entries older than this are removed on read
    CACHE_DIR_NAME = "latest"
    ENV_CACHE_DIR = "LATEST_CACHE_DIR"

    # Configuration
    CONFIG_DIR_NAME = "latest"
    CONFIG_FILE_NAMES = ("config.yml", "config.yaml", "config.toml")
    ENV_CONFIG = "LATEST_CONFIG"
    ENV_LOG_LEVEL = "LATEST_LOG_LEVEL"

    # Timeouts (seconds)
    COMMAND_TIMEOUT = 5  # local `<cmd> --version` probes
    REGISTRY_COMMAND_TIMEOUT = 30  # brew/apt/conda/pip/uv invocations
    REQUEST_TIMEOUT = 10

    # Concurrency
    MAX_PARALLEL_PACKAGES = 8  # packages resolved at once by lookup_many

    # Registry endpoints
    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    REGISTRY_URL_CARGO = "https://crates.io/api/v1/crates/"
    REGISTRY_URL_GO = "https://proxy.golang.org/"
    REGISTRY_URL_GEM = "https://rubygems.org/api/v1/gems/"
    REGISTRY_URL_HEX = "https://hex.pm/api/packages/"
    REGISTRY_URL_PUB = "https://pub.dev/api/packages/"
    REGISTRY_URL_COMPOSER = "https://repo.packagist.org/p2/"
    REGISTRY_URL_MAVEN = "https://search.maven.org/solrsearch/select"
    REGISTRY_URL_NUGET = "https://api.nuget.org/v3-flatcontainer/"
    REGISTRY_URL_DOCKER = "https://registry.hub.docker.com/v2/repositories/"
    GITHUB_API_BASE = "https://api.github.com"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    DOCKER_TAGS_PAGE_SIZE = 100

    # Project files
    CARGO_TOML_FILE = "Cargo.toml"
    PACKAGE_JSON_FILE = "package.json"
    UV_LOCK_FILE = "uv.lock"
    PYPROJECT_FILE = "pyproject.toml"
    REQUIREMENTS_FILE = "requirements.txt"
    GO_MOD_FILE = "go.mod"
