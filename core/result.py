"""
Result values for calls that cross the AvaTax boundary.

Operations that talk to the tax service never raise on transport or
service failures. They hand back either a ``Success`` wrapping the parsed
payload or a ``Failure`` wrapping a typed error, and the caller branches on
the discriminant instead of comparing sentinel strings.

Example:
    >>> result = client.get_tax(request)
    >>> if result.is_success():
    ...     total = result.unwrap()["TotalTax"]
    ... else:
    ...     logger.warning("tax unavailable", error=str(result.error))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Never


@dataclass(frozen=True, slots=True)
class Success[T]:
    """
    A call that completed and produced a value.

    Attributes:
        value: The produced value.
    """

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the wrapped value."""
        return self.value


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """
    A call that did not produce a value.

    Attributes:
        error: Why the call failed.
    """

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Never:
        """
        Refuse to produce a value.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"Cannot unwrap Failure: {self.error}")


type Result[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Wrap ``value`` in a Success."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Wrap ``error`` in a Failure."""
    return Failure(error)
