"""
Shared schemas: error codes, error models and the exception taxonomy.
"""
from .errors import (
    ErrorCodes,
    SumTreeError,
    SumTreeException,
    EmptyInputError,
    MismatchedLengthError,
    IndexOutOfRangeError,
    MalformedProofError,
    InvalidLeafError,
    ValueOutOfRangeError,
)

__all__ = [
    "ErrorCodes",
    "SumTreeError",
    "SumTreeException",
    "EmptyInputError",
    "MismatchedLengthError",
    "IndexOutOfRangeError",
    "MalformedProofError",
    "InvalidLeafError",
    "ValueOutOfRangeError",
]
