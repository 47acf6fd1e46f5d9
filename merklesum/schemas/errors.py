"""
Error taxonomy for sum Merkle tree construction, proofs and verification.

Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every failure here is local, synchronous and non-retryable: the
computation is pure, so retrying with the same input gives the same
outcome.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    MISMATCHED_LENGTH = "MISMATCHED_LENGTH"
    INVALID_LEAF = "INVALID_LEAF"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"

    # Proof Errors
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    MALFORMED_PROOF = "MALFORMED_PROOF"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SumTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors between components without exceptions,
    enabling structured error handling and serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "SumTreeException":
        """Convert this error model to the matching exception."""
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code)
        if exc_type is None:
            return SumTreeException(
                message=self.message,
                code=self.code,
                details=self.details,
                retryable=self.retryable,
            )
        return exc_type(message=self.message, details=self.details)


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SumTreeException(Exception):
    """
    Base exception for all sum Merkle tree errors.

    Carries structured error information and can be converted
    to/from SumTreeError models. Subclasses set ``default_code`` and
    accept ``(message, details)`` so a SumTreeError round-trips to the
    same exception type.
    """

    default_code = "SUM_TREE_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = dict(details or {})
        self.retryable = retryable

    def to_error_model(self) -> SumTreeError:
        """Convert this exception to a SumTreeError model."""
        return SumTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(SumTreeException, ValueError):
    """Raised when a tree is requested over zero leaves."""

    default_code = ErrorCodes.EMPTY_INPUT

    def __init__(
        self,
        message: str = "Cannot build a sum Merkle tree from zero leaves",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, details=details)


class MismatchedLengthError(SumTreeException, ValueError):
    """Raised when the value and data sequences differ in length."""

    default_code = ErrorCodes.MISMATCHED_LENGTH

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, details=details)

    @classmethod
    def for_lengths(cls, values_length: int, data_length: int) -> "MismatchedLengthError":
        return cls(
            f"Values and data must have the same length, "
            f"got {values_length} values and {data_length} data items",
            details={"values_length": values_length, "data_length": data_length},
        )


class IndexOutOfRangeError(SumTreeException, IndexError):
    """Raised when a proof is requested for a node that does not exist."""

    default_code = ErrorCodes.INDEX_OUT_OF_RANGE

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, details=details)

    @classmethod
    def for_index(cls, index: int, tree_length: int) -> "IndexOutOfRangeError":
        return cls(
            f"Node index {index} out of range for tree of {tree_length} nodes",
            details={"index": index, "tree_length": tree_length},
        )


class MalformedProofError(SumTreeException, ValueError):
    """Raised when a proof is structurally invalid (as opposed to failing the check)."""

    default_code = ErrorCodes.MALFORMED_PROOF

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        level: int | None = None,
    ) -> None:
        super().__init__(message=message, details=details)
        if level is not None:
            self.details["level"] = level


class InvalidLeafError(SumTreeException, ValueError):
    """Raised when a leaf value or identifier has the wrong type or width."""

    default_code = ErrorCodes.INVALID_LEAF

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        leaf_index: int | None = None,
    ) -> None:
        super().__init__(message=message, details=details)
        if leaf_index is not None:
            self.details["leaf_index"] = leaf_index


class ValueOutOfRangeError(SumTreeException, ValueError):
    """Raised when a value or subtree sum cannot be encoded in 32 bytes."""

    default_code = ErrorCodes.VALUE_OUT_OF_RANGE

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        leaf_index: int | None = None,
    ) -> None:
        super().__init__(message=message, details=details)
        if leaf_index is not None:
            self.details["leaf_index"] = leaf_index


_EXCEPTIONS_BY_CODE: dict[str, type[SumTreeException]] = {
    ErrorCodes.EMPTY_INPUT: EmptyInputError,
    ErrorCodes.MISMATCHED_LENGTH: MismatchedLengthError,
    ErrorCodes.INDEX_OUT_OF_RANGE: IndexOutOfRangeError,
    ErrorCodes.MALFORMED_PROOF: MalformedProofError,
    ErrorCodes.INVALID_LEAF: InvalidLeafError,
    ErrorCodes.VALUE_OUT_OF_RANGE: ValueOutOfRangeError,
}
