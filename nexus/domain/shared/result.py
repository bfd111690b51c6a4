"""Result monad for explicit error handling in domain operations.

Operations that can fail for an expected reason (a user lacking permission,
a stage that does not exist, a rejected remote write) return a Result
instead of raising. Callers surface the error text to the user as-is.

Example usage:
    >>> def require_stage(stages: list[str], name: str) -> Result[int, str]:
    ...     if name not in stages:
    ...         return Err(f"Unknown stage: {name}")
    ...     return Ok(stages.index(name))
    ...
    >>> result = require_stage(["Inquiry", "Design"], "Design")
    >>> if is_ok(result):
    ...     print(result.value)
    1
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying a user-facing error."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Ok."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Err."""
    return isinstance(result, Err)


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Chain a second fallible step onto an Ok result.

    Args:
        result: The result to chain from.
        fn: Step taking the Ok value and returning a new Result.

    Returns:
        The Result of fn, or the original Err unchanged.
    """
    if isinstance(result, Ok):
        return fn(result.value)
    return result


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the Ok value, or default when the result is an error."""
    if isinstance(result, Ok):
        return result.value
    return default
