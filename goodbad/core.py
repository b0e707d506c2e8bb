"""Good/bad value containers and the protocol they share."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from goodbad.bits import bit_at

__all__ = [
    "TwoStatesError",
    "GoodBad",
    "Ok",
    "Err",
    "Some",
    "Nothing",
    "Continue",
    "Break",
    "from_good",
    "from_bad",
    "into_good",
    "into_bad",
]


class TwoStatesError(TypeError):
    """Raised when a value cannot be split into exactly a good or a bad state."""


class GoodBad:
    """Base for enum-like values whose variants are marked good, bad or neutral.

    Subclasses describe themselves through a few class attributes and hooks:
    ``_index`` (or ``_variant_index``) gives the position of the variant,
    ``_good_bits`` and ``_bad_bits`` are packed flag sets over those positions,
    ``_payload`` returns the inner value, and ``_exactly_two`` marks types with
    exactly one good and one bad variant.
    """

    _index: ClassVar[int] = 0
    _good_bits: ClassVar[bytes] = b"\x00"
    _bad_bits: ClassVar[bytes] = b"\x00"
    _exactly_two: ClassVar[bool] = False

    def _variant_index(self) -> int:
        return type(self)._index

    def _payload(self) -> Any:
        return ()

    @classmethod
    def _from_good(cls, value: Any) -> GoodBad:
        raise TypeError(f"{cls.__name__} cannot be built from a good value")

    @classmethod
    def _from_bad(cls, value: Any) -> GoodBad:
        raise TypeError(f"{cls.__name__} cannot be built from a bad value")

    def is_good(self) -> bool:
        """Whether the current variant is marked good."""
        return bit_at(self._good_bits, self._variant_index())

    def is_bad(self) -> bool:
        """Whether the current variant is marked bad."""
        return bit_at(self._bad_bits, self._variant_index())

    def good(self) -> Ok | Err:
        """``Ok(inner)`` for a good variant, otherwise ``Err(self)``."""
        if self.is_good():
            return Ok(self._payload())
        return Err(self)

    def bad(self) -> Ok | Err:
        """``Err(inner)`` for a bad variant, otherwise ``Ok(self)``."""
        if self.is_bad():
            return Err(self._payload())
        return Ok(self)

    def two_states(self) -> Ok | Err:
        """``Ok(good inner)`` or ``Err(bad inner)`` for a two-variant type."""
        if not type(self)._exactly_two:
            raise TwoStatesError(
                f"{type(self).__name__} does not have exactly one good "
                "and one bad variant"
            )
        good = self.good()
        if isinstance(good, Ok):
            return good
        bad = self.bad()
        if isinstance(bad, Err):
            return bad
        raise TwoStatesError(
            f"Encountered a non-binary variant for type {type(self).__name__}. "
            "This should never happen."
        )


class _Result(GoodBad):
    _good_bits = b"\x01"
    _bad_bits = b"\x02"
    _exactly_two = True

    @classmethod
    def _from_good(cls, value: Any) -> Ok:
        return Ok(value)

    @classmethod
    def _from_bad(cls, value: Any) -> Err:
        return Err(value)


@dataclass(frozen=True)
class Ok(_Result):
    """Successful result; the good variant."""

    value: Any
    _index: ClassVar[int] = 0

    def _payload(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Err(_Result):
    """Failed result; the bad variant."""

    value: Any
    _index: ClassVar[int] = 1

    def _payload(self) -> Any:
        return self.value


class _Option(GoodBad):
    _good_bits = b"\x01"
    _bad_bits = b"\x02"
    _exactly_two = True

    @classmethod
    def _from_good(cls, value: Any) -> Some:
        return Some(value)

    @classmethod
    def _from_bad(cls, value: Any) -> Nothing:
        if value != ():
            raise TypeError("an optional value is built from a bad value of () only")
        return Nothing()


@dataclass(frozen=True)
class Some(_Option):
    """Present optional value; the good variant."""

    value: Any
    _index: ClassVar[int] = 0

    def _payload(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Nothing(_Option):
    """Absent optional value; the bad variant, carrying ``()``."""

    _index: ClassVar[int] = 1


class _ControlFlow(GoodBad):
    _good_bits = b"\x01"
    _bad_bits = b"\x02"
    _exactly_two = True

    @classmethod
    def _from_good(cls, value: Any) -> Continue:
        return Continue(value)

    @classmethod
    def _from_bad(cls, value: Any) -> Break:
        return Break(value)


@dataclass(frozen=True)
class Continue(_ControlFlow):
    """Keep going; the good variant."""

    value: Any = ()
    _index: ClassVar[int] = 0

    def _payload(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Break(_ControlFlow):
    """Stop early; the bad variant."""

    value: Any = ()
    _index: ClassVar[int] = 1

    def _payload(self) -> Any:
        return self.value


def _require_goodbad(cls: type) -> type[GoodBad]:
    if not (isinstance(cls, type) and issubclass(cls, GoodBad)):
        raise TypeError(f"{cls!r} is not a good/bad type")
    return cls


def from_good(cls: type, value: Any) -> GoodBad:
    """Build the good variant of ``cls`` holding ``value``."""
    return _require_goodbad(cls)._from_good(value)


def from_bad(cls: type, value: Any) -> GoodBad:
    """Build the bad variant of ``cls`` holding ``value``."""
    return _require_goodbad(cls)._from_bad(value)


def into_good(value: Any, cls: type) -> GoodBad:
    """Wrap ``value`` as the good variant of ``cls``."""
    return from_good(cls, value)


def into_bad(value: Any, cls: type) -> GoodBad:
    """Wrap ``value`` as the bad variant of ``cls``."""
    return from_bad(cls, value)