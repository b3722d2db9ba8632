# MIT License (see LICENSE)
"""
Observable value cells with synchronous change notification.

The model is built from two kinds of cell:

- ObservableValue: a mutable value with optional range / value-set
  validation. Written only by its owning Spring or System.
- DerivedValue: a read-only value computed from one or more source cells
  and recomputed whenever a source changes.

All writes go through commit(), which applies several cells as one atomic
update in three phases:

  1. Validate every (cell, value) pair. Any failure raises before anything
     is written, so a rejected call leaves the model unchanged.
  2. Assign the raw values.
  3. Recompute derived cells, then fire listeners: written cells first (in
     assignment order), derived cells after them.

Listeners therefore always observe a fully settled model. Cells taking part
in a commit are locked until it finishes; a listener that tries to write one
of them again gets a RuntimeError instead of starting a propagation cycle.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

from ..errors import ConfigurationError, RangeError
from ..types import Range
from ..util import f64, is_finite, is_number

logger = logging.getLogger(__name__)

T = TypeVar("T")

# listener(new_value, old_value); old_value is None for the initial link() call
Listener = Callable[[Any, Any], None]


class ReadOnlyValue(Generic[T]):
    """
    A value that can be read and observed but not written by callers.

    Attributes:
        name: Label used in error and log messages.
    """

    def __init__(self, value: T, name: str = "") -> None:
        self.name = name
        self._value = value
        self._listeners: list[Listener] = []
        self._dependents: list[DerivedValue] = []
        self._locked = False

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    def get(self) -> T:
        return self._value

    def subscribe(self, listener: Listener) -> None:
        """Call listener(new, old) after every change of this value."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """
        Stop notifying a listener.

        Raises:
            ValueError: If the listener was never subscribed.
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            raise ValueError(f"listener is not subscribed to {self.name or 'value'}") from None

    def link(self, listener: Listener) -> None:
        """Subscribe and immediately call listener(value, None)."""
        self.subscribe(listener)
        listener(self._value, None)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _refresh_dependents(self, changed: list[tuple["ReadOnlyValue", Any]]) -> None:
        """Recompute derived cells (transitively), collecting those whose value changed."""
        for dep in self._dependents:
            old = dep._value
            if dep._recompute():
                changed.append((dep, old))
                dep._refresh_dependents(changed)

    def _fire(self, old: Any) -> None:
        for listener in list(self._listeners):
            listener(self._value, old)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self._value!r})"


class ObservableValue(ReadOnlyValue[T]):
    """
    A mutable value cell with optional validation.

    Args:
        value: Initial value, restored by reset().
        valid_range: If given, every value must satisfy valid_range.contains().
        valid_values: If given, every value must be one of these.
        name: Label used in error messages.

    Numeric cells (initial value is a float) coerce writes to float64 and
    reject NaN and infinities.

    Raises:
        ConfigurationError: If the initial value is not valid.
    """

    def __init__(
        self,
        value: T,
        valid_range: Range | None = None,
        valid_values: Sequence[T] | None = None,
        name: str = "",
    ) -> None:
        super().__init__(value, name)
        self.valid_range = valid_range
        self.valid_values = tuple(valid_values) if valid_values is not None else None
        self._numeric = isinstance(value, float)
        try:
            self._value = self._coerce(value)
            self.validate(self._value)
        except (RangeError, TypeError) as e:
            raise ConfigurationError(f"invalid initial value for {name or 'value'}: {e}") from e
        self.initial_value = self._value

    def _coerce(self, value: Any) -> Any:
        if self._numeric:
            return f64(value)
        return value

    def validate(self, value: Any) -> None:
        """
        Check a candidate value without writing it.

        Raises:
            RangeError: If value is non-finite, outside valid_range or not in valid_values.
            TypeError: If a numeric cell is given a non-number.
        """
        if self._numeric or self.valid_range is not None:
            if not is_number(value):
                raise TypeError(f"{self.name or 'value'} expects a number, got {type(value).__name__}")
            if not is_finite(value):
                raise RangeError(self.name, value, message=f"{self.name} must be finite, got {value!r}")
        if self.valid_range is not None and not self.valid_range.contains(value):
            raise RangeError(self.name, value, self.valid_range)
        if self.valid_values is not None and value not in self.valid_values:
            raise RangeError(
                self.name, value, message=f"{self.name} must be one of {self.valid_values}, got {value!r}"
            )

    def set(self, value: T) -> None:
        """Write a single cell. Owners use commit() for multi-cell updates."""
        commit([(self, value)])

    def reset(self) -> None:
        """Restore the construction-time value."""
        commit([(self, self.initial_value)])


class DerivedValue(ReadOnlyValue[T]):
    """
    A read-only value computed from source cells.

    Args:
        sources: Cells the value depends on.
        derivation: Pure function called with the current source values,
                    in the same order as sources.
        name: Label used in log messages.
    """

    def __init__(
        self,
        sources: Iterable[ReadOnlyValue],
        derivation: Callable[..., T],
        name: str = "",
    ) -> None:
        self._sources = tuple(sources)
        self._derivation = derivation
        super().__init__(self._compute(), name)
        for source in self._sources:
            source._dependents.append(self)

    def _compute(self) -> T:
        return self._derivation(*(s._value for s in self._sources))

    def _recompute(self) -> bool:
        new = self._compute()
        if new == self._value:
            return False
        self._value = new
        return True

    def dispose(self) -> None:
        """Detach from the source cells; the value stops updating."""
        for source in self._sources:
            if self in source._dependents:
                source._dependents.remove(self)


def commit(assignments: Iterable[tuple[ObservableValue, Any]]) -> bool:
    """
    Atomically write several cells, then notify.

    Every derived cell depending on a changed cell is refreshed before any
    listener runs. Changed written cells then notify in assignment order,
    followed by the changed derived cells.

    Args:
        assignments: (cell, value) pairs. A cell may appear at most once.

    Returns:
        True if at least one cell changed value.

    Raises:
        RangeError: If any value fails validation (nothing is written).
        TypeError: If a numeric cell receives a non-number (nothing is written).
        RuntimeError: If a cell is written while a commit touching it is notifying.
        ValueError: If the same cell is assigned twice.
    """
    pending: list[tuple[ObservableValue, Any]] = []
    seen: set[int] = set()
    for cell, value in assignments:
        if id(cell) in seen:
            raise ValueError(f"{cell.name or 'cell'} assigned twice in one commit")
        seen.add(id(cell))
        if cell._locked:
            raise RuntimeError(f"re-entrant write to {cell.name or 'cell'} while it is notifying")
        if cell._numeric and is_number(value):
            value = f64(value)
        cell.validate(value)
        pending.append((cell, value))

    changed: list[tuple[ReadOnlyValue, Any]] = []
    for cell, value in pending:
        old = cell._value
        if value != old:
            cell._value = value
            changed.append((cell, old))
    if not changed:
        return False

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "commit %s",
            ", ".join(f"{cell.name}={cell._value!r}" for cell, _ in changed),
        )

    derived: list[tuple[ReadOnlyValue, Any]] = []
    for cell, _ in changed:
        cell._refresh_dependents(derived)

    locked = [cell for cell, _ in pending]
    for cell in locked:
        cell._locked = True
    try:
        for cell, old in changed + derived:
            cell._fire(old)
    finally:
        for cell in locked:
            cell._locked = False
    return True
