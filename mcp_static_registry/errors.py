"""Custom exception classes for MCP Static Registry."""

from typing import Optional, Sequence


class RegistryBuildError(Exception):
    """Base class for all custom exceptions in MCP Static Registry."""

    pass


class ConfigurationError(RegistryBuildError):
    """Raised when loading or validating the build configuration fails."""

    pass


# ── Loading ──────────────────────────────────────────────────────────────


class RegistryLoadError(RegistryBuildError):
    """Raised when the registry file cannot be turned into a document."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        full_msg = message
        if path:
            full_msg = f"{message} (file: {path})"
        super().__init__(full_msg)


class NotFoundError(RegistryLoadError):
    """Raised when the registry file does not exist."""

    def __init__(self, path: str):
        super().__init__("Registry file not found", path)


class ParseError(RegistryLoadError):
    """Raised when the registry file is not well-formed JSON."""

    def __init__(
        self,
        path: str,
        detail: str,
        orig_exc: Optional[Exception] = None,
    ):
        self.detail = detail
        self.orig_exc = orig_exc
        super().__init__(f"Invalid JSON: {detail}", path)


class SchemaError(RegistryLoadError):
    """Raised when the registry document does not have the expected shape."""

    pass


# ── Per-server validation ────────────────────────────────────────────────


class ServerValidationError(RegistryBuildError):
    """Base class for per-entry server validation failures."""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        super().__init__(message)


class MissingFieldError(ServerValidationError):
    """Raised when a server entry lacks one or more required fields."""

    def __init__(self, index: int, fields: Sequence[str]):
        self.fields = tuple(fields)
        message = (
            f"Server at index {index} is missing required field(s): "
            f"{', '.join(self.fields)}"
        )
        super().__init__(message, index)


class InvalidIdError(ServerValidationError):
    """Raised when a server id does not match the identifier grammar."""

    def __init__(self, server_id: str, index: Optional[int] = None):
        self.server_id = server_id
        message = (
            f"Server {server_id!r} has an invalid id. Only letters, digits, "
            "dots and hyphens are allowed."
        )
        if index is not None:
            message += f" (index {index})"
        super().__init__(message, index)


class InvalidVersionError(ServerValidationError):
    """Raised when a server version cannot be used as a path segment."""

    def __init__(self, server_id: str, version: str, index: Optional[int] = None):
        self.server_id = server_id
        self.version = version
        message = (
            f"Server {server_id!r} has an invalid version {version!r}: "
            "versions may not contain path separators or be '.' or '..'"
        )
        if index is not None:
            message += f" (index {index})"
        super().__init__(message, index)


class DuplicateIdError(ServerValidationError):
    """Raised when two server entries share the same id."""

    def __init__(self, server_id: str, first_index: int, index: int):
        self.server_id = server_id
        self.first_index = first_index
        message = (
            f"Server id {server_id!r} at index {index} duplicates the entry "
            f"at index {first_index}; their output paths would collide."
        )
        super().__init__(message, index)


# ── Output ───────────────────────────────────────────────────────────────


class WriteError(RegistryBuildError):
    """Raised when writing the output tree fails."""

    def __init__(
        self,
        path: str,
        orig_exc: Optional[Exception] = None,
        reason: Optional[str] = None,
    ):
        self.path = path
        self.orig_exc = orig_exc
        full_msg = f"Failed to write output: {path}"
        if reason:
            full_msg += f" ({reason})"
        elif orig_exc:
            full_msg += f" ({type(orig_exc).__name__}: {orig_exc})"
        super().__init__(full_msg)
