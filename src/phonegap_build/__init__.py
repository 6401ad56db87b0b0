"""Python client for the PhoneGap Build API.

Basic Usage:
    ```python
    from phonegap_build import PhonegapBuild, file

    with PhonegapBuild("my-token") as api:
        outcome = api.create_application_from_file("app.zip", {"title": "Demo"})
        if not outcome.ok:
            print(outcome.error)

        # Any endpoint, with a mix of JSON fields and file uploads
        api.request(["apps", 42, "icon"], "post", {"icon": file("icon.png")})
    ```
"""

from .auth import (
    Credentials,
    clear_credentials,
    get_credentials,
    load_credentials_from_file,
    save_credentials,
)
from .client import APPLICATION_DEFAULTS, PhonegapBuild
from .config import (
    ANDROID,
    IOS,
    LEGACY_SUCCESS_CODES,
    ROLE_DEV,
    ROLE_TESTER,
    SUCCESS_CODES,
    __version__,
)
from .exceptions import (
    BuildError,
    FileNotFoundError,
    MissingCredentialsError,
    PhonegapBuildError,
    UnsupportedMethodError,
)
from .params import FileRef, ParamValue, file
from .request import FilePart, Operation, RequestBuilder, RequestDescriptor
from .response import (
    Failure,
    Outcome,
    ResponseInterpreter,
    Success,
    flatten_error,
)
from .transport import HttpxTransport, Transport, TransportResult

__all__ = [
    # Version
    "__version__",
    # Client
    "PhonegapBuild",
    "APPLICATION_DEFAULTS",
    # Constants
    "IOS",
    "ANDROID",
    "ROLE_TESTER",
    "ROLE_DEV",
    "SUCCESS_CODES",
    "LEGACY_SUCCESS_CODES",
    # Auth
    "Credentials",
    "get_credentials",
    "load_credentials_from_file",
    "save_credentials",
    "clear_credentials",
    # Requests
    "FileRef",
    "ParamValue",
    "file",
    "Operation",
    "RequestBuilder",
    "RequestDescriptor",
    "FilePart",
    # Transport
    "Transport",
    "HttpxTransport",
    "TransportResult",
    # Responses
    "Outcome",
    "Success",
    "Failure",
    "ResponseInterpreter",
    "flatten_error",
    # Exceptions
    "PhonegapBuildError",
    "BuildError",
    "UnsupportedMethodError",
    "MissingCredentialsError",
    "FileNotFoundError",
]
