"""Pagination state and how it advances between fetches.

A paginator never mutates the state it is given. The coordinator keeps the
single authoritative copy and replaces it with ``advance(state)`` after each
successful fetch, so the state used for fetch N+1 is always the one produced
from fetch N.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from qlm.config import ParameterValue
from qlm.exceptions import ConfigurationError

PaginationState = dict[str, ParameterValue | list[ParameterValue]]


class Paginator(Protocol):
    """Produces request parameters for successive pages."""

    def initial_state(self) -> PaginationState: ...

    def advance(self, state: PaginationState) -> PaginationState: ...


@dataclass(frozen=True)
class OffsetPaginator:
    """Offset/limit pagination: ``start`` grows by ``count`` after every page.

    Field names are configurable for services that call them something else::

        OffsetPaginator(count=24, start_field="offset", count_field="limit")
    """

    count: int = 50
    start: int = 0
    start_field: str = "start"
    count_field: str = "count"

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ConfigurationError(f"Page size must be at least 1, got {self.count}")
        if self.start < 0:
            raise ConfigurationError(f"Start offset must not be negative, got {self.start}")

    def initial_state(self) -> PaginationState:
        return {self.start_field: self.start, self.count_field: self.count}

    def advance(self, state: PaginationState) -> PaginationState:
        start = state[self.start_field]
        count = state[self.count_field]
        if not isinstance(start, int) or not isinstance(count, int):
            raise TypeError(f"{self.start_field!r} and {self.count_field!r} must be integers")
        return {**state, self.start_field: start + count}


@dataclass(frozen=True)
class FunctionPaginator:
    """Any other policy (cursor tokens, page numbers) as a state plus a function.

    ``next`` receives a copy of the current state and returns the next one;
    mutating the copy in place and returning it is fine.
    """

    state: Mapping[str, ParameterValue | list[ParameterValue]]
    next: Callable[[PaginationState], PaginationState] = field(repr=False)

    def initial_state(self) -> PaginationState:
        return _copy_state(self.state)

    def advance(self, state: PaginationState) -> PaginationState:
        return self.next(_copy_state(state))


def _copy_state(state: Mapping[str, ParameterValue | list[ParameterValue]]) -> PaginationState:
    """Copy a state mapping, including list values, preserving key order."""
    return {key: list(value) if isinstance(value, list) else value for key, value in state.items()}
