"""
Registry error taxonomy and result values

Registry operations never raise for domain failures. Each one returns a
Result holding either a value or a RegistryError tagged with a numeric code.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    """Numeric error codes shared by all registry operations"""
    VALIDATION = 400
    UNAUTHORIZED = 403
    NOT_FOUND = 404
    CONFLICT = 409


ERROR_KINDS = {
    ErrorCode.VALIDATION: 'ValidationError',
    ErrorCode.UNAUTHORIZED: 'AuthorizationError',
    ErrorCode.NOT_FOUND: 'NotFoundError',
    ErrorCode.CONFLICT: 'ConflictError',
}


@dataclass(frozen=True)
class RegistryError:
    """A failed registry operation"""
    code: ErrorCode
    message: str = ''

    @property
    def kind(self) -> str:
        return ERROR_KINDS[self.code]

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind} ({int(self.code)}): {self.message}"
        return f"{self.kind} ({int(self.code)})"


def validation_error(message: str = '') -> RegistryError:
    return RegistryError(ErrorCode.VALIDATION, message)


def authorization_error(message: str = '') -> RegistryError:
    return RegistryError(ErrorCode.UNAUTHORIZED, message)


def not_found_error(message: str = '') -> RegistryError:
    return RegistryError(ErrorCode.NOT_FOUND, message)


def conflict_error(message: str = '') -> RegistryError:
    return RegistryError(ErrorCode.CONFLICT, message)


class RegistryOperationError(Exception):
    """Raised only when a caller unwraps a failed Result"""

    def __init__(self, error: RegistryError):
        super().__init__(str(error))
        self.error = error

    @property
    def code(self) -> ErrorCode:
        return self.error.code


@dataclass(frozen=True)
class Result:
    """
    Outcome of a registry operation

    Exactly one of value/error is meaningful: a successful result carries the
    operation's value, a failed one carries the RegistryError.
    """
    value: Any = None
    error: Optional[RegistryError] = None

    @classmethod
    def success(cls, value: Any) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: RegistryError) -> 'Result':
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> Optional[ErrorCode]:
        """Error code of a failed result, None on success"""
        return self.error.code if self.error else None

    def unwrap(self) -> Any:
        """
        Return the value of a successful result

        Raises:
            RegistryOperationError: if the result is a failure
        """
        if self.error is not None:
            raise RegistryOperationError(self.error)
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the {'value': ...} / {'error': code} wire shape"""
        if self.error is not None:
            return {'error': int(self.error.code)}
        return {'value': self.value}
