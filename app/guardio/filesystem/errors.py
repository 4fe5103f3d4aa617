"""Exceptions raised by the guarded filesystem layer.

Validation failures derive from PathValidationError and are raised before
any native call runs. Native call failures derive from OperationError and
always carry the operation name, the path and the underlying OSError.
"""


class GuardError(Exception):
    """Base exception for guarded filesystem errors.

    Attributes:
        path: Path the failing check or operation was applied to.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


# =============================================================================
# Validation errors
# =============================================================================


class PathValidationError(GuardError):
    """Raised when a path does not pass the validation gate."""


class EmptyPathError(PathValidationError):
    """Raised when the path argument is an empty string."""

    def __init__(self, what: str = "path") -> None:
        super().__init__(f"{what} must not be empty", "")


class ForbiddenPathError(PathValidationError):
    """Raised when a path matches or is nested under a blocked entry.

    Attributes:
        entry: The blocked file or directory the path collided with.
    """

    def __init__(self, path: str, entry: str) -> None:
        super().__init__(f"Operation on {path} is forbidden (blocked: {entry})", path)
        self.entry = entry


class KindMismatchError(PathValidationError):
    """Raised when an existing path is not of the expected kind.

    Attributes:
        expected: Kind the caller asked for ("file" or "directory").
        actual: Kind found on disk.
    """

    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__(f"{path} is a {actual}, expected a {expected}", path)
        self.expected = expected
        self.actual = actual


class MetadataError(PathValidationError):
    """Raised when a metadata lookup fails for a reason other than absence.

    Attributes:
        cause: The OSError reported by the lookup.
    """

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"Metadata lookup of {path} failed: {cause}", path)
        self.cause = cause


# =============================================================================
# Operation errors
# =============================================================================


class OperationError(GuardError):
    """Raised when a native filesystem call fails.

    Attributes:
        op: Name of the failing operation.
        path: Path the operation was applied to.
        cause: The OSError reported by the native call, or the
            UnicodeError for text that cannot be encoded.
    """

    op = "operation"

    def __init__(self, path: str, cause: OSError | UnicodeError) -> None:
        super().__init__(f"{self.op} {path} failed: {cause}", path)
        self.cause = cause


class OpenError(OperationError):
    op = "open"


class CloseError(OperationError):
    op = "close"


class ReadError(OperationError):
    op = "read"


class WriteError(OperationError):
    op = "write"


class RemoveError(OperationError):
    op = "remove"


class CreateDirError(OperationError):
    op = "create directory"


class TruncateError(OperationError):
    op = "truncate"


class TimestampError(OperationError):
    op = "update timestamps of"


# =============================================================================
# Argument errors
# =============================================================================


class NotExistentError(GuardError):
    """Raised when an operation requires an existing path but it is absent."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} does not exist", path)


class NilRequestError(GuardError):
    """Raised when a required request argument is None."""

    def __init__(self, what: str = "request") -> None:
        super().__init__(f"{what} must not be None")


class NilHandleError(GuardError):
    """Raised when a file handle is None or already closed."""

    def __init__(self, path: str = "") -> None:
        super().__init__("file handle is None or already closed", path)


class GoldenMismatchError(GuardError):
    """Raised when test data differs from the content of its golden file.

    Attributes:
        name: Name of the testcase.
        actual: Test data as provided.
        want: Reference data read from the golden file.
    """

    def __init__(self, name: str, path: str, actual: str, want: str) -> None:
        super().__init__(f"{name}: got {actual!r}, want {want!r} (golden file {path})", path)
        self.name = name
        self.actual = actual
        self.want = want
