"""Synchronous client for the PhoneGap Build API."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from .auth import Credentials, get_credentials
from .config import (
    ANDROID,
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    IOS,
    ROLE_TESTER,
    SUCCESS_CODES,
    USER_AGENT,
)
from .exceptions import BuildError
from .params import FileRef
from .request import Operation, RequestBuilder
from .response import Failure, Outcome, ResponseInterpreter
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

# Mirrors the defaults documented for POST /apps. Keys are left out on
# purpose: the service rejects an empty keys object.
APPLICATION_DEFAULTS: dict[str, Any] = {
    "title": "Phonegap Application",
    "package": "com.phonegap.www",
    "version": "0.0.1",
    "description": "",
    "debug": False,
    "private": True,
    "phonegap_version": "3.1.0",
    "hydrates": False,
}


class PhonegapBuild:
    """Client for the PhoneGap Build REST API.

    Every API method returns an ``Outcome``: ``Success`` with the decoded
    response body, or ``Failure`` with a message. Nothing is raised for
    failed requests.

    Example:
        ```python
        from phonegap_build import PhonegapBuild

        with PhonegapBuild("my-token") as api:
            outcome = api.get_applications()
            if outcome.ok:
                for app in outcome.payload["apps"]:
                    print(app["title"])
            else:
                print(outcome.error)
        ```
    """

    def __init__(
        self,
        username_or_token: str = "",
        password: str = "",
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        success_codes: Iterable[int] = SUCCESS_CODES,
        transport: Transport | None = None,
        credentials_path: Path | None = None,
    ) -> None:
        """Initialize the client.

        Pass a single value to authenticate with a token, or a username and
        password for HTTP Basic auth. With neither, credentials are looked up
        in the environment and then in the credentials file.

        Args:
            username_or_token: Token, or username when ``password`` is given.
            password: Password for ``username_or_token``.
            endpoint: Base URL of the API.
            timeout: Request timeout in seconds for the default transport.
            success_codes: HTTP status codes treated as success.
            transport: Transport to send requests with. Defaults to an
                ``HttpxTransport`` owned by this client.
            credentials_path: Credentials file used when nothing is passed.
        """
        if username_or_token and password:
            self._credentials = Credentials.from_basic(username_or_token, password)
        elif username_or_token:
            self._credentials = Credentials.from_token(username_or_token)
        else:
            self._credentials = get_credentials(credentials_path=credentials_path)

        self._builder = RequestBuilder(endpoint=endpoint, user_agent=USER_AGENT)
        self._interpreter = ResponseInterpreter(success_codes)
        if transport is not None:
            self._transport = transport
            self._owns_transport = False
        else:
            self._transport = HttpxTransport(timeout=timeout)
            self._owns_transport = True
        self._last_outcome: Outcome | None = None

    @classmethod
    def factory(cls, username_or_token: str = "", password: str = "", **kwargs: Any) -> PhonegapBuild:
        """Create a new client; same arguments as the constructor."""
        return cls(username_or_token, password, **kwargs)

    def __enter__(self) -> PhonegapBuild:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    # ==================== AUTHENTICATION ====================

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def set_credentials(self, username: str, password: str) -> PhonegapBuild:
        """Authenticate with username and password. Clears any token."""
        self._credentials = Credentials.from_basic(username, password)
        return self

    def set_token(self, token: str) -> PhonegapBuild:
        """Authenticate with a token. Clears any username and password."""
        self._credentials = Credentials.from_token(token)
        return self

    # ==================== LAST OUTCOME ====================

    @property
    def last_outcome(self) -> Outcome | None:
        """Outcome of the most recent request, None before the first one."""
        return self._last_outcome

    @property
    def success(self) -> bool:
        """Whether the last request was successful."""
        return self._last_outcome is not None and self._last_outcome.ok

    @property
    def error(self) -> str:
        """Error message of the last request, empty if it succeeded."""
        return self._last_outcome.error if self._last_outcome is not None else ""

    # ==================== REQUESTS ====================

    def request(
        self,
        path: str | Sequence[Any],
        method: str = "get",
        params: Mapping[str, Any] | None = None,
    ) -> Outcome:
        """Perform one API request.

        Args:
            path: URI, or URI segments joined with ``/``.
            method: HTTP verb, case-insensitive.
            params: Request parameters. ``FileRef`` values are uploaded as
                files, everything else is sent as JSON in the ``data`` field.

        Returns:
            The outcome, also available afterwards as ``last_outcome``.
        """
        self._last_outcome = None
        operation = Operation(path=path, method=method, params=dict(params or {}))

        try:
            descriptor = self._builder.build(operation, self._credentials)
        except BuildError as e:
            logger.debug("Not sending %s %s: %s", method.upper(), operation.uri, e)
            outcome: Outcome = Failure(e.message)
        else:
            outcome = self._interpreter.interpret(self._transport.send(descriptor))

        self._last_outcome = outcome
        return outcome

    # ==================== PROFILE & APPLICATIONS ====================

    def get_profile(self) -> Outcome:
        """Get the authenticated user's profile."""
        return self.request("me")

    def get_applications(self) -> Outcome:
        return self.request("apps")

    def get_application(self, application_id: int | str) -> Outcome:
        return self.request(["apps", application_id])

    def get_application_icon(self, application_id: int | str) -> Outcome:
        return self.request(["apps", application_id, "icon"])

    def download_application_platform(self, application_id: int | str, platform: str) -> Outcome:
        """Get the download location of an application's build for a platform."""
        return self.request(["apps", application_id, platform])

    def create_application(self, options: Mapping[str, Any] | None = None) -> Outcome:
        """Create an application.

        Args:
            options: Application settings, merged over ``APPLICATION_DEFAULTS``.
                Pass ``keys`` here to sign builds.

        Returns:
            Outcome with the created application.
        """
        return self.request("apps", "post", {**APPLICATION_DEFAULTS, **(options or {})})

    def create_application_from_repo(
        self, source: str, options: Mapping[str, Any] | None = None
    ) -> Outcome:
        """Create an application from a remote git repository URL."""
        return self.create_application(
            {**(options or {}), "create_method": "remote_repo", "repo": source}
        )

    def create_application_from_file(
        self, source: str | Path, options: Mapping[str, Any] | None = None
    ) -> Outcome:
        """Create an application from a local zip archive or index.html."""
        return self.create_application(
            {**(options or {}), "create_method": "file", "file": _file_ref(source)}
        )

    def update_application(
        self, application_id: int | str, options: Mapping[str, Any] | None = None
    ) -> Outcome:
        return self.request(["apps", application_id], "put", options)

    def update_application_from_repo(
        self, application_id: int | str, options: Mapping[str, Any] | None = None
    ) -> Outcome:
        """Pull the latest code from the repository the app was created from."""
        return self.update_application(application_id, {**(options or {}), "pull": True})

    def update_application_from_file(
        self,
        application_id: int | str,
        source: str | Path,
        options: Mapping[str, Any] | None = None,
    ) -> Outcome:
        return self.update_application(
            application_id, {**(options or {}), "file": _file_ref(source)}
        )

    def update_application_icon(self, application_id: int | str, source: str | Path) -> Outcome:
        """Upload a PNG icon for an application."""
        return self.request(
            ["apps", application_id, "icon"], "post", {"icon": _file_ref(source)}
        )

    def delete_application(self, application_id: int | str) -> Outcome:
        return self.request(["apps", application_id], "delete")

    # ==================== BUILDS ====================

    def build_application(
        self, application_id: int | str, platforms: str | Sequence[str] | None = None
    ) -> Outcome:
        """Queue builds of an application.

        Args:
            application_id: Application to build.
            platforms: Platform name or names. All platforms when omitted.
        """
        options: dict[str, Any] = {}
        if platforms:
            options["platforms"] = [platforms] if isinstance(platforms, str) else list(platforms)
        return self.request(["apps", application_id, "build"], "post", options)

    def build_application_platform(self, application_id: int | str, platform: str) -> Outcome:
        return self.request(["apps", application_id, "build", platform], "post")

    # ==================== COLLABORATORS ====================

    def add_collaborator(
        self, application_id: int | str, options: Mapping[str, Any] | None = None
    ) -> Outcome:
        """Invite a collaborator.

        Args:
            application_id: Application to share.
            options: ``email`` and ``role`` (``ROLE_TESTER`` or ``ROLE_DEV``).
                Role defaults to tester.
        """
        payload = {"email": "", "role": ROLE_TESTER, **(options or {})}
        return self.request(["apps", application_id, "collaborators"], "post", payload)

    def update_collaborator(
        self,
        application_id: int | str,
        collaborator_id: int | str,
        options: Mapping[str, Any] | None = None,
    ) -> Outcome:
        payload = {"role": ROLE_TESTER, **(options or {})}
        return self.request(
            ["apps", application_id, "collaborators", collaborator_id], "put", payload
        )

    def delete_collaborator(self, application_id: int | str, collaborator_id: int | str) -> Outcome:
        return self.request(["apps", application_id, "collaborators", collaborator_id], "delete")

    # ==================== KEYS ====================

    def get_keys(self) -> Outcome:
        return self.request("keys")

    def get_keys_platform(self, platform: str) -> Outcome:
        return self.request(["keys", platform])

    def get_key_platform(self, platform: str, key_id: int | str) -> Outcome:
        return self.request(["keys", platform, key_id])

    def add_key_platform(self, platform: str, options: Mapping[str, Any] | None = None) -> Outcome:
        """Add a signing key for any platform.

        Prefer ``add_key_android`` / ``add_key_ios``, which know which files
        each platform needs.
        """
        return self.request(["keys", platform], "post", options)

    def add_key_android(
        self,
        title: str,
        keystore: str | Path,
        options: Mapping[str, Any] | None = None,
    ) -> Outcome:
        """Add an Android signing key.

        Args:
            title: Key title.
            keystore: Path to the keystore file.
            options: Extra settings such as ``alias``, ``key_pw`` and
                ``keystore_pw``.
        """
        payload = {"title": title, "keystore": _file_ref(keystore), **(options or {})}
        return self.add_key_platform(ANDROID, payload)

    def add_key_ios(
        self,
        title: str,
        cert: str | Path,
        profile: str | Path,
        options: Mapping[str, Any] | None = None,
    ) -> Outcome:
        """Add an iOS signing key.

        Args:
            title: Key title.
            cert: Path to the .p12 certificate.
            profile: Path to the .mobileprovision file.
            options: Extra settings such as ``password``.
        """
        payload = {
            "title": title,
            "cert": _file_ref(cert),
            "profile": _file_ref(profile),
            **(options or {}),
        }
        return self.add_key_platform(IOS, payload)

    def update_key_platform(
        self, platform: str, key_id: int | str, options: Mapping[str, Any] | None = None
    ) -> Outcome:
        """Update or unlock a signing key."""
        return self.request(["keys", platform, key_id], "put", options)

    def update_key_ios(self, key_id: int | str, password: str) -> Outcome:
        return self.update_key_platform(IOS, key_id, {"password": password})

    def update_key_android(self, key_id: int | str, key_pw: str, keystore_pw: str) -> Outcome:
        return self.update_key_platform(
            ANDROID, key_id, {"key_pw": key_pw, "keystore_pw": keystore_pw}
        )

    def delete_key_platform(self, platform: str, key_id: int | str) -> Outcome:
        return self.request(["keys", platform, key_id], "delete")


def _file_ref(source: str | Path | FileRef) -> FileRef:
    if isinstance(source, FileRef):
        return source
    return FileRef(path=str(source))
