"""Error hierarchy for docsync.

Every public error class inherits from DocsyncError. Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Pure predicates in the package (``validate_incremental_save``,
``has_unresolved_conflicts``) never raise; they collapse every failure to
``False``.  Errors surface only from decoding, from explicit apply steps,
and from input validation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    DECODE_ERROR = "DECODE_ERROR"
    INTEGRITY_ERROR = "INTEGRITY_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VERSION_CONFLICT = "VERSION_CONFLICT"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class DocsyncError(Exception):
    """Base exception for all docsync errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys and expected types are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            _rebuild_error,
            (type(self), self.code, self.message, self.context, self.cause),
        )


def _rebuild_error(
    cls: type[DocsyncError],
    code: str,
    message: str,
    context: dict[str, Any],
    cause: Exception | None,
) -> DocsyncError:
    """Recreate an error without going through subclass constructors."""
    err = cls.__new__(cls)
    DocsyncError.__init__(err, code, message, context, cause)
    return err


# ---------------------------------------------------------------------------
# Codec / envelope errors
# ---------------------------------------------------------------------------

class DocsyncDecodeError(DocsyncError):
    """A serialized diff could not be decoded.

    Context keys: ``reason``, ``data_length``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DECODE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class DocsyncIntegrityError(DocsyncError):
    """An incremental-save envelope failed checksum or decode verification.

    Raised only by explicit apply steps; the validation predicate itself
    returns ``False`` instead.

    Context keys: ``document_id``, ``expected_checksum``, ``actual_checksum``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INTEGRITY_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Input / conflict errors
# ---------------------------------------------------------------------------

class DocsyncValidationError(DocsyncError):
    """An argument passed to a conflict-workflow call was malformed.

    Context keys: ``field``, ``value``, ``constraint``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class DocsyncVersionConflictError(DocsyncError):
    """The document moved past the envelope's base version before it was
    applied.

    Context keys: ``document_id``, ``base_version``, ``current_version``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VERSION_CONFLICT,
            message=message,
            context=context,
            cause=cause,
        )
