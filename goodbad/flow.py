"""Early exits that keep the good value and send everything else elsewhere.

The helpers here take a good/bad value apart. They return the kept inner
value. Otherwise they *propagate*: they return early from the enclosing
:func:`propagating` function, break out of a :func:`loop`, or skip to its
next item. They can also fall back to a replacement value.

A ``fallback`` argument decides what happens when the value is not kept:

* omitted: return the dropped value early from the enclosing function;
* a :class:`ShortCircuit` instance such as ``EarlyReturn(x)``,
  ``LoopBreak(x)`` or ``LoopContinue()``: raise it;
* a callable: it is called with the dropped value. If it returns a
  :class:`ShortCircuit`, that is raised; otherwise its result is used as
  the value of the expression;
* anything else: used as the value of the expression.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from goodbad.core import Err, GoodBad, Ok

__all__ = [
    "ShortCircuit",
    "EarlyReturn",
    "LoopBreak",
    "LoopContinue",
    "propagating",
    "loop",
    "good",
    "bad",
    "take",
    "reject",
    "reject_good",
    "reject_bad",
    "is_good",
    "is_bad",
]

F = TypeVar("F", bound=Callable[..., Any])

_MISSING: Any = object()


class ShortCircuit(BaseException):
    """Base of the signals that leave the current computation early."""

    value: Any = None


class EarlyReturn(ShortCircuit):
    """Return ``value`` from the enclosing :func:`propagating` function."""

    def __init__(self, value: Any = ()) -> None:
        super().__init__(value)
        self.value = value


class LoopBreak(ShortCircuit):
    """Stop the enclosing :func:`loop`, which then yields ``value``."""

    def __init__(self, value: Any = ()) -> None:
        super().__init__(value)
        self.value = value


class LoopContinue(ShortCircuit):
    """Skip to the next item of the enclosing :func:`loop`."""

    def __init__(self) -> None:
        super().__init__()
        self.value = None


def propagating(func: F) -> F:
    """Make ``func`` return the value of any :class:`EarlyReturn` raised inside it."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except EarlyReturn as signal:
            return signal.value

    return wrapper  # type: ignore[return-value]


def loop(iterable: Iterable[Any]) -> Callable[[Callable[[Any], Any]], Any]:
    """Run a body over ``iterable``, honouring break and continue signals.

    Used as a decorator, the decorated name is bound to the loop's result: the
    value of the :class:`LoopBreak` that stopped it, or ``None`` when the items
    ran out.
    """

    def run(body: Callable[[Any], Any]) -> Any:
        for item in iterable:
            try:
                body(item)
            except LoopContinue:
                continue
            except LoopBreak as signal:
                return signal.value
        return None

    return run


def _require(value: Any) -> GoodBad:
    if not isinstance(value, GoodBad):
        raise TypeError(f"{value!r} is not a good/bad value")
    return value


def _propagate(dropped: Any, fallback: Any) -> Any:
    if fallback is _MISSING:
        raise EarlyReturn(dropped)
    if isinstance(fallback, ShortCircuit):
        raise fallback
    if callable(fallback):
        outcome = fallback(dropped)
        if isinstance(outcome, ShortCircuit):
            raise outcome
        return outcome
    return fallback


def _split(value: GoodBad, fallback: Any, full: bool, keep_good: bool) -> Ok | Err:
    if callable(fallback) and not isinstance(fallback, ShortCircuit) and not full:
        return value.two_states()
    return value.good() if keep_good else value.bad()


def good(value: Any, fallback: Any = _MISSING, full: bool = False) -> Any:
    """Return the inner value of a good variant, otherwise propagate.

    With a callable fallback and ``full`` false, the value must have exactly one
    good and one bad variant, and the callable receives the bad inner value.
    With ``full`` true it receives the whole value instead.
    """
    split = _split(_require(value), fallback, full, keep_good=True)
    if isinstance(split, Ok):
        return split.value
    return _propagate(split.value, fallback)


def bad(value: Any, fallback: Any = _MISSING, full: bool = False) -> Any:
    """Return the inner value of a bad variant, otherwise propagate.

    With a callable fallback and ``full`` false, the value must have exactly one
    good and one bad variant, and the callable receives the good inner value.
    With ``full`` true it receives the whole value instead.
    """
    split = _split(_require(value), fallback, full, keep_good=False)
    if isinstance(split, Err):
        return split.value
    return _propagate(split.value, fallback)


def _is_variant(value: GoodBad, variant: Any) -> bool:
    if isinstance(variant, type):
        return isinstance(value, variant)
    return value == variant


def take(value: Any, variant: Any, fallback: Any = _MISSING) -> Any:
    """Return the fields of ``variant`` if ``value`` is one, otherwise propagate ``value``.

    ``variant`` is a variant class, or the instance of a unit variant. A unit
    variant gives ``()``, a single field gives that field, several give a tuple.
    """
    checked = _require(value)
    if _is_variant(checked, variant):
        return checked._payload()
    return _propagate(checked, fallback)


def reject(value: Any, variant: Any, fallback: Any = _MISSING) -> Any:
    """Propagate the fields of ``variant`` if ``value`` is one, otherwise return ``value``."""
    checked = _require(value)
    if _is_variant(checked, variant):
        return _propagate(checked._payload(), fallback)
    return checked


def reject_good(value: Any, fallback: Any = _MISSING) -> Any:
    """Propagate the inner value of a good variant, otherwise return ``value``."""
    split = _require(value).good()
    if isinstance(split, Ok):
        return _propagate(split.value, fallback)
    return split.value


def reject_bad(value: Any, fallback: Any = _MISSING) -> Any:
    """Propagate the inner value of a bad variant, otherwise return ``value``."""
    split = _require(value).bad()
    if isinstance(split, Err):
        return _propagate(split.value, fallback)
    return split.value


def is_good(value: Any) -> bool:
    """Whether ``value`` is in a good variant."""
    return _require(value).is_good()


def is_bad(value: Any) -> bool:
    """Whether ``value`` is in a bad variant."""
    return _require(value).is_bad()