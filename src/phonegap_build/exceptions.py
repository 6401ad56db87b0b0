"""Exception classes for the PhoneGap Build client."""

from __future__ import annotations


class PhonegapBuildError(Exception):
    """Base exception for all phonegap_build errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BuildError(PhonegapBuildError):
    """A request could not be built, so nothing was sent.

    ``PhonegapBuild.request`` turns these into a ``Failure`` outcome;
    they only escape when ``RequestBuilder`` is used directly.
    """


class UnsupportedMethodError(BuildError):
    """HTTP verb is not one of GET, POST, PUT or DELETE."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown request method: {method}")


class MissingCredentialsError(BuildError):
    """Neither a token nor a username/password pair is available."""

    def __init__(
        self, message: str = "Please provide token or username and password"
    ) -> None:
        super().__init__(message)


class FileNotFoundError(BuildError):
    """A file parameter does not point at a readable file.

    Attributes:
        name: Parameter the file was attached to.
        path: Path that failed to resolve.
    """

    def __init__(self, name: str, path: str) -> None:
        self.name = name
        self.path = path
        super().__init__(f"File for parameter '{name}' not found: {path}")
