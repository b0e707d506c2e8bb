"""Declaring enum-like types whose variants are marked good or bad."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import UnionType
from typing import Any, ClassVar, Union, get_args, get_origin

from goodbad.bits import pack_bools
from goodbad.core import GoodBad

__all__ = ["DeriveError", "VariantSpec", "PropagateEnum", "variant", "derive"]


class DeriveError(TypeError):
    """Raised when a class cannot be turned into a good/bad enum."""


_UNIT = "unit"
_TUPLE = "tuple"
_NAMED = "named"


@dataclass(frozen=True)
class VariantSpec:
    """Declaration of one variant: its field types and its good/bad marks."""

    fields: tuple[Any, ...] = ()
    good: bool = False
    bad: bool = False
    names: tuple[str, ...] | None = None

    @property
    def kind(self) -> str:
        if self.names is not None:
            return _NAMED
        return _TUPLE if self.fields else _UNIT


def _is_type_spec(ty: Any) -> bool:
    if ty is Any:
        return True
    if isinstance(ty, tuple):
        return all(_is_type_spec(item) for item in ty)
    origin = get_origin(ty)
    if origin in (Union, UnionType):
        return all(_is_type_spec(arg) for arg in get_args(ty))
    if isinstance(origin, type):
        return True
    return isinstance(ty, type)


def _matches(value: Any, ty: Any) -> bool:
    if ty is Any or ty is object:
        return True
    if isinstance(ty, tuple):
        return (
            isinstance(value, tuple)
            and len(value) == len(ty)
            and all(_matches(item, item_ty) for item, item_ty in zip(value, ty))
        )
    origin = get_origin(ty)
    if origin in (Union, UnionType):
        return any(_matches(value, arg) for arg in get_args(ty))
    if isinstance(origin, type):
        return isinstance(value, origin)
    if isinstance(ty, type):
        return isinstance(value, ty)
    return False


def _type_name(ty: Any) -> str:
    if ty is Any:
        return "Any"
    if isinstance(ty, tuple):
        return "(" + ", ".join(_type_name(item) for item in ty) + ")"
    if isinstance(ty, type) and get_origin(ty) is None:
        return ty.__name__
    return repr(ty)


def variant(
    *args: Any,
    good: bool = False,
    bad: bool = False,
    named: Mapping[str, Any] | Any = None,
) -> VariantSpec:
    """Declare a variant.

    Positional arguments are the field types of a tuple-like variant; a tuple
    of types stands for a single tuple-typed field. ``named`` gives field names
    (or a mapping of names to types) for a struct-like variant.
    """
    if named is not None:
        if args:
            raise DeriveError(
                "a variant takes either positional field types or named fields, not both"
            )
        if isinstance(named, Mapping):
            names = tuple(named)
            fields = tuple(named.values())
        elif isinstance(named, str):
            names, fields = (named,), (Any,)
        else:
            names = tuple(named)
            fields = (Any,) * len(names)
        for name in names:
            if not isinstance(name, str) or not name.isidentifier():
                raise DeriveError(f"invalid field name {name!r}")
        if len(set(names)) != len(names):
            raise DeriveError(f"duplicate field names in {names!r}")
    else:
        names, fields = None, tuple(args)
    for ty in fields:
        if not _is_type_spec(ty):
            raise DeriveError(f"unsupported field type {ty!r}")
    return VariantSpec(fields=fields, good=bool(good), bad=bool(bad), names=names)


class PropagateEnum(GoodBad):
    """Base for enums built by :func:`derive`; instances are immutable."""

    _spec: ClassVar[VariantSpec | None] = None
    _variants: ClassVar[dict[str, type] | None] = None
    _good_builders: ClassVar[tuple[tuple[tuple, type], ...]] = ()
    _bad_builders: ClassVar[tuple[tuple[tuple, type], ...]] = ()

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        spec = type(self)._spec
        name = type(self).__name__
        if spec is None:
            raise TypeError(f"{name} cannot be instantiated directly; use one of its variants")
        if spec.kind == _UNIT:
            if args or kwargs:
                raise TypeError(f"{name} takes no fields")
            values: tuple[Any, ...] = ()
        elif spec.kind == _TUPLE:
            if kwargs:
                raise TypeError(f"{name} takes positional fields only")
            if len(args) != len(spec.fields):
                raise TypeError(
                    f"{name} takes {len(spec.fields)} field(s), got {len(args)}"
                )
            values = args
        else:
            values = self._bind_named(spec, args, kwargs)
        for value, ty in zip(values, spec.fields):
            if not _matches(value, ty):
                raise TypeError(
                    f"{name} expects a value of type {_type_name(ty)}, got {value!r}"
                )
        object.__setattr__(self, "_values", tuple(values))

    @staticmethod
    def _bind_named(spec: VariantSpec, args: tuple, kwargs: dict) -> tuple:
        names = spec.names or ()
        if len(args) > len(names):
            raise TypeError(f"too many fields: expected at most {len(names)}")
        bound = dict(zip(names, args))
        for key, value in kwargs.items():
            if key not in names:
                raise TypeError(f"unknown field {key!r}")
            if key in bound:
                raise TypeError(f"field {key!r} given twice")
            bound[key] = value
        missing = [key for key in names if key not in bound]
        if missing:
            raise TypeError(f"missing field(s): {', '.join(missing)}")
        return tuple(bound[key] for key in names)

    def __getattr__(self, name: str) -> Any:
        spec = type(self)._spec
        values = self.__dict__.get("_values")
        if spec is not None and spec.names and values is not None and name in spec.names:
            return values[spec.names.index(name)]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropagateEnum):
            return NotImplemented
        return type(self) is type(other) and self._values == other._values

    def __hash__(self) -> int:
        return hash((type(self), self._values))

    def __repr__(self) -> str:
        spec = type(self)._spec
        name = type(self).__name__
        if spec is None or spec.kind == _UNIT:
            return name
        if spec.kind == _NAMED:
            inner = ", ".join(
                f"{key}={value!r}" for key, value in zip(spec.names or (), self._values)
            )
        else:
            inner = ", ".join(repr(value) for value in self._values)
        return f"{name}({inner})"

    def _payload(self) -> Any:
        spec = type(self)._spec
        if spec is None or spec.kind != _TUPLE:
            return ()
        if len(self._values) == 1:
            return self._values[0]
        return self._values

    @classmethod
    def _from_good(cls, value: Any) -> PropagateEnum:
        return cls._build(cls._good_builders, value, "good")

    @classmethod
    def _from_bad(cls, value: Any) -> PropagateEnum:
        return cls._build(cls._bad_builders, value, "bad")

    @classmethod
    def _build(cls, builders: tuple, value: Any, label: str) -> PropagateEnum:
        if cls._variants is None:
            raise TypeError(f"{cls.__name__} has not been derived")
        candidates = [vcls for key, vcls in builders if _fits(key, value)]
        if not candidates:
            raise TypeError(
                f"{cls.__name__} has no single {label} variant that holds {value!r}"
            )
        if len(candidates) > 1:
            names = ", ".join(vcls.__name__ for vcls in candidates)
            raise TypeError(
                f"{value!r} fits several {label} variants of {cls.__name__}: {names}"
            )
        vcls = candidates[0]
        kind, fields = _group_parts(vcls._spec)
        if kind == _UNIT:
            return vcls()
        if len(fields) == 1:
            return vcls(value)
        return vcls(*value)


def _group_parts(spec: VariantSpec) -> tuple[str, tuple]:
    return spec.kind, spec.fields


def _fits(key: tuple[str, tuple], value: Any) -> bool:
    kind, fields = key
    if kind == _UNIT:
        return isinstance(value, tuple) and value == ()
    if len(fields) == 1:
        return _matches(value, fields[0])
    return _matches(value, fields)


def _ambiguity_types(key: tuple[str, tuple]) -> tuple | None:
    kind, fields = key
    if kind != _TUPLE:
        return None
    if len(fields) == 1:
        return fields[0] if isinstance(fields[0], tuple) else None
    return fields


def _find_ambiguity(keys: list[tuple[str, tuple]]) -> tuple | None:
    seen: set[tuple] = set()
    for key in keys:
        types = _ambiguity_types(key)
        if types is None:
            continue
        if types in seen:
            return types
        seen.add(types)
    return None


def derive(cls: type) -> type:
    """Turn a :class:`PropagateEnum` subclass with declared variants into an enum.

    Unit variants become singleton instances on the class; the others become
    subclasses that are called with their fields.
    """
    if not (isinstance(cls, type) and issubclass(cls, PropagateEnum)):
        raise DeriveError("`Propagate` can only be derived for enums")
    if cls is PropagateEnum or cls._spec is not None or "_variants" in cls.__dict__:
        raise DeriveError(f"{cls.__name__} cannot be derived again")

    specs = [(name, value) for name, value in cls.__dict__.items() if isinstance(value, VariantSpec)]
    if not specs:
        raise DeriveError("`Propagate` cannot be derived for enums without fields")

    for _, spec in specs:
        if (spec.good or spec.bad) and spec.kind == _NAMED:
            raise DeriveError("Named struct cannot have this attribute")

    if not any(spec.good or spec.bad for _, spec in specs):
        raise DeriveError(
            "Enum must contain at least one good or bad variant. "
            "Did you forget to mark a good or bad variant?"
        )

    good_groups: dict[tuple, list[str]] = {}
    bad_groups: dict[tuple, list[str]] = {}
    for name, spec in specs:
        key = _group_parts(spec)
        if spec.good:
            good_groups.setdefault(key, []).append(name)
        if spec.bad:
            bad_groups.setdefault(key, []).append(name)

    ambiguous = _find_ambiguity(list(bad_groups)) or _find_ambiguity(list(good_groups))
    if ambiguous is not None:
        types = ", ".join(_type_name(ty) for ty in ambiguous)
        raise DeriveError(
            f"Types `({types})` and `{types}` are ambiguous. "
            "Cannot infer types for both tuple and n-args variants."
        )

    variant_classes: dict[str, type] = {}
    for index, (name, spec) in enumerate(specs):
        namespace = {
            "__module__": cls.__module__,
            "__qualname__": f"{cls.__qualname__}.{name}",
            "__doc__": f"The {name} variant of {cls.__name__}.",
            "_spec": spec,
            "_index": index,
        }
        variant_classes[name] = type(cls)(name, (cls,), namespace)

    good_bits = pack_bools(spec.good for _, spec in specs)
    bad_bits = pack_bools(spec.bad for _, spec in specs)

    type.__setattr__(cls, "_good_bits", good_bits)
    type.__setattr__(cls, "_bad_bits", bad_bits)
    type.__setattr__(
        cls,
        "_exactly_two",
        len(good_groups) == 1
        and len(bad_groups) == 1
        and len(specs) == 2
        and good_bits != bad_bits,
    )
    type.__setattr__(cls, "_variants", variant_classes)
    type.__setattr__(
        cls,
        "_good_builders",
        tuple((key, variant_classes[names[0]]) for key, names in good_groups.items() if len(names) == 1),
    )
    type.__setattr__(
        cls,
        "_bad_builders",
        tuple((key, variant_classes[names[0]]) for key, names in bad_groups.items() if len(names) == 1),
    )

    for name, spec in specs:
        vcls = variant_classes[name]
        type.__setattr__(cls, name, vcls() if spec.kind == _UNIT else vcls)
    return cls