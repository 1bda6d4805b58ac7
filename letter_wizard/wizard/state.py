# letter_wizard/wizard/state.py
"""
Explicit form state and its reducer.

FormState is immutable: every change goes through reduce(state, event), which
returns a new state. Replaying the same events yields the same state.
"""

import copy
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


class FormState(Mapping[str, Any]):
    """Read-only field values plus the set of fields the user has touched."""

    __slots__ = ("_values", "_dirty")

    def __init__(
        self, values: Mapping[str, Any] | None = None, dirty: Iterable[str] = ()
    ) -> None:
        self._values = MappingProxyType(dict(values or {}))
        self._dirty = frozenset(dirty)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"FormState({dict(self._values)!r}, dirty={sorted(self._dirty)!r})"

    @property
    def dirty(self) -> frozenset[str]:
        return self._dirty

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the values, detached from this state."""
        return copy.deepcopy(dict(self._values))


@dataclass(frozen=True)
class FieldUpdated:
    name: str
    value: Any


@dataclass(frozen=True)
class FieldTouched:
    name: str


@dataclass(frozen=True)
class FieldsTouched:
    names: tuple[str, ...]


@dataclass(frozen=True)
class FormReset:
    values: Mapping[str, Any] | None = None


FormEvent = FieldUpdated | FieldTouched | FieldsTouched | FormReset


def reduce(state: FormState, event: FormEvent) -> FormState:
    """
    Apply one event to a form state.

    Updating a field also marks it touched. Reset clears the dirty set and
    restores the given values (empty by default).

    Raises:
        TypeError: For unknown event types
    """
    if isinstance(event, FieldUpdated):
        values = dict(state)
        values[event.name] = event.value
        return FormState(values, state.dirty | {event.name})

    if isinstance(event, FieldTouched):
        return FormState(state, state.dirty | {event.name})

    if isinstance(event, FieldsTouched):
        return FormState(state, state.dirty | set(event.names))

    if isinstance(event, FormReset):
        return FormState(event.values)

    raise TypeError(f"Unknown form event: {type(event).__name__}")
