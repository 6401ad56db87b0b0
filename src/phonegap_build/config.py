"""PhoneGap Build API configuration constants."""

import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

try:
    __version__ = version("phonegap-build")
except PackageNotFoundError:  # pragma: no cover - local/checkout usage
    __version__ = "0.0.0"

DEFAULT_ENDPOINT = os.environ.get(
    "PHONEGAP_BUILD_API_URL", "https://build.phonegap.com/api/v1/"
)
USER_AGENT = f"phonegap-build-python/{__version__}"
DEFAULT_TIMEOUT = 30.0  # seconds

METHODS = ("GET", "POST", "PUT", "DELETE")

SUCCESS_CODES = frozenset({200, 201, 202, 302})
# Older service deployments only answered with these
LEGACY_SUCCESS_CODES = frozenset({200, 302})

TOKEN_ENV = "PHONEGAP_BUILD_TOKEN"
USERNAME_ENV = "PHONEGAP_BUILD_USERNAME"
PASSWORD_ENV = "PHONEGAP_BUILD_PASSWORD"

CONFIG_DIR = Path.home() / ".phonegap-build"
CREDENTIALS_FILE = CONFIG_DIR / "credentials.json"

IOS = "ios"
ANDROID = "android"

ROLE_TESTER = "tester"  # read-only
ROLE_DEV = "dev"  # read and write
