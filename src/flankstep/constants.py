"""
Constants and configuration values for flankstep.

This module contains the hardcoded URLs, file names, environment variable
names and other constants used throughout the step.
"""

# Flank release repository
FLANK_REPOSITORY_URL = "https://github.com/TestArmada/flank"
FLANK_BINARY_NAME = "flank.jar"
LATEST_VERSION_TOKEN = "latest"
RESOLVED_VERSION_PREFIX = "v"
RELEASE_DOWNLOAD_PATH = "releases/download"
GIT_TAG_REF_PREFIX = "refs/tags/"

# Network settings (in seconds)
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 8192

# Platforms understood by flank
PLATFORM_ANDROID = "android"
PLATFORM_IOS = "ios"

# File and directory names
DEFAULT_RESULTS_DIR = "./results"
CREDENTIAL_FILE_NAME = "cred.json"
CREDENTIAL_TEMP_PREFIX = "credential"
BINARY_TEMP_PREFIX = "flank-bin"
CREDENTIAL_FILE_PERMISSIONS = 0o600

# Step inputs (read from the environment)
ENV_SERVICE_ACCOUNT_JSON = "google_service_account_json"
ENV_CONFIG_PATH = "config_path"
ENV_VERSION = "version"
ENV_COMMAND_FLAGS = "command_flags"
ENV_RESULTS_DIR = "results_dir"
ENV_DEPLOY_DIR = "BITRISE_DEPLOY_DIR"
CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"
SECRET_MASK = "***"

# Logging configuration
LOGGER_NAME = "flankstep"
LOG_FILE_NAME = "flankstep.log"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5
LOG_LEVEL_ENV_VAR = "FLANKSTEP_LOG_LEVEL"

# Flank process exit codes
FLANK_EXIT_CODES = {
    0: "All tests passed",
    1: "A general failure occurred",
    10: "At least one matrix was not successful, tests failed or were inconclusive",
    15: "Firebase Test Lab could not determine if the test matrix passed or failed",
    18: "The test environment for this test execution is not supported",
    19: "The test matrix was canceled by the user",
    20: "A test infrastructure error occurred",
}
FLANK_UNKNOWN_EXIT_MESSAGE = "Flank exited with an unrecognized status"
