"""Result type for explicit error handling.

Pipeline steps return ``Ok(value)`` or ``Err(error)`` instead of raising, so
each failure is handled where the CLI decides on an exit code.

Usage:
    match builder.stage(request, directory):
        case Ok(path):
            console.print(f"staged {path}")
        case Err(error):
            print_release_error(error, console)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result holding ``value``."""

    value: T

    def unwrap(self) -> T:
        """Returns the contained value."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Applies ``f`` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result holding ``error``."""

    error: E

    def unwrap(self) -> None:
        """Raises ValueError carrying the error.

        Raises:
            ValueError: Always, since Err has no value.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
