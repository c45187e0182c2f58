"""Shape descriptors telling the bridges how a Python type maps onto a tree.

Every type the codec handles is described as exactly one of a closed set of
shapes. ``describe`` derives the shape from a type annotation (dataclasses,
pydantic models, enums, ``NewType``, ``dict[K, V]``, the scalar markers of
:mod:`vdfcodec.scalars`); ``shape_of`` does the same from a runtime value. A
class can also describe itself with a ``__kv_shape__`` classmethod::

    class Celsius:
        def __init__(self, degrees: float):
            self.degrees = degrees

        @classmethod
        def __kv_shape__(cls) -> NewtypeShape:
            return NewtypeShape("Celsius", float, wrap=cls, unwrap=lambda c: c.degrees)
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Callable, Literal, Mapping, NewType, Union, get_args, get_origin

from pydantic import BaseModel, RootModel
from pydantic.fields import FieldInfo

from .errors import UnresolvedAnnotation
from .scalars import PLAIN_SCALARS, ScalarKind


@dataclass(frozen=True, slots=True)
class ScalarShape:
    kind: ScalarKind

    @property
    def name(self) -> str:
        return self.kind.value


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One record field: attribute ``name``, document ``key`` and declared type."""

    name: str
    key: str
    annotation: Any


@dataclass(frozen=True, slots=True)
class RecordShape:
    name: str
    cls: type
    fields: tuple[FieldSpec, ...]
    build: Callable[[dict[str, Any]], Any]


@dataclass(frozen=True, slots=True)
class MapShape:
    key: Any = str
    value: Any = Any
    build: Callable[[], Any] = dict
    name: str = "map"


@dataclass(frozen=True, slots=True)
class VariantShape:
    name: str
    variants: tuple[str, ...]
    to_name: Callable[[Any], str]
    from_name: Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class NewtypeShape:
    name: str
    inner: Any
    wrap: Callable[[Any], Any]
    unwrap: Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class RejectedShape:
    name: str


Shape = ScalarShape | RecordShape | MapShape | VariantShape | NewtypeShape | RejectedShape

_BYTES_TYPES = (bytes, bytearray, memoryview)


def describe(annotation: Any) -> Shape:
    own_shape = getattr(annotation, "__kv_shape__", None)
    if own_shape is not None and isinstance(annotation, type):
        return own_shape()

    origin = get_origin(annotation)
    if origin is Annotated:
        base, *extras = get_args(annotation)
        for extra in extras:
            if isinstance(extra, ScalarKind):
                return ScalarShape(extra)
        return describe(base)
    if annotation is Any:
        return RejectedShape("any")
    if annotation is None or annotation is type(None):
        return RejectedShape("unit")
    if isinstance(annotation, NewType):
        return NewtypeShape(annotation.__name__, annotation.__supertype__, wrap=annotation, unwrap=_identity)
    if origin in (Union, types.UnionType):
        if type(None) in get_args(annotation):
            return RejectedShape("option")
        return RejectedShape("union")
    if origin is Literal:
        return _literal_shape(annotation)
    if origin is not None:
        return _describe_generic(annotation, origin)
    if isinstance(annotation, type):
        return _describe_class(annotation)
    return RejectedShape(repr(annotation))


def shape_of(value: Any) -> Shape:
    """Shape of an untyped value, judged from its runtime type."""
    if value is None:
        return RejectedShape("option")
    cls = type(value)
    if isinstance(value, Mapping) and not hasattr(cls, "__kv_shape__"):
        return MapShape(key=Any, value=Any, build=dict)
    return describe(cls)


def document_name(shape: Shape) -> str | None:
    """The natural outer key for a top-level value of this shape, if it has one."""
    if isinstance(shape, (RecordShape, NewtypeShape, VariantShape)) and shape.name:
        return shape.name
    return None


def _describe_generic(annotation: Any, origin: Any) -> Shape:
    args = get_args(annotation)
    if not isinstance(origin, type):
        return RejectedShape(str(annotation))
    if issubclass(origin, tuple):
        return RejectedShape("tuple")
    if issubclass(origin, Mapping):
        key, value = args if len(args) == 2 else (str, Any)
        return MapShape(key=key, value=value, build=origin if issubclass(origin, dict) else dict)
    if issubclass(origin, collections.abc.Iterable):
        return RejectedShape("seq")
    return RejectedShape(str(annotation))


def _describe_class(cls: type) -> Shape:
    if issubclass(cls, Enum):
        return _enum_shape(cls)
    if cls in PLAIN_SCALARS:
        return ScalarShape(PLAIN_SCALARS[cls])
    if issubclass(cls, RootModel):
        return _root_model_shape(cls)
    if issubclass(cls, BaseModel):
        return _model_shape(cls)
    if dataclasses.is_dataclass(cls):
        return _dataclass_shape(cls)
    if issubclass(cls, _BYTES_TYPES):
        return RejectedShape("byte array")
    if issubclass(cls, tuple):
        return RejectedShape("tuple_struct" if hasattr(cls, "_fields") else "tuple")
    if issubclass(cls, Mapping):
        return MapShape(build=cls if issubclass(cls, dict) else dict)
    if issubclass(cls, collections.abc.Iterable) and not issubclass(cls, str):
        return RejectedShape("seq")
    return RejectedShape(cls.__name__)


def _enum_shape(cls: type[Enum]) -> VariantShape:
    def to_name(member: Any) -> str:
        if not isinstance(member, cls):
            raise ValueError(f"expected a {cls.__name__} member, got {member!r}")
        return member.name

    return VariantShape(cls.__name__, tuple(member.name for member in cls), to_name, cls.__getitem__)


def _literal_shape(annotation: Any) -> Shape:
    choices = get_args(annotation)
    if not all(isinstance(choice, str) for choice in choices):
        return RejectedShape("non-string Literal")

    def to_name(value: Any) -> str:
        if not isinstance(value, str) or value not in choices:
            raise ValueError(f"expected one of {list(choices)}, got {value!r}")
        return value

    return VariantShape("", choices, to_name, _identity)


def _dataclass_shape(cls: type) -> Shape:
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError as exc:
        raise UnresolvedAnnotation(exc.name or str(exc), cls.__qualname__) from exc
    fields = tuple(
        FieldSpec(field.name, field.name, hints[field.name])
        for field in dataclasses.fields(cls)
        if field.init
    )
    if not fields:
        return RejectedShape("unit_struct")
    return RecordShape(cls.__name__, cls, fields, build=lambda values: cls(**values))


def _model_shape(cls: type[BaseModel]) -> Shape:
    fields = tuple(
        FieldSpec(name, info.alias or name, _field_annotation(info)) for name, info in cls.model_fields.items()
    )
    if not fields:
        return RejectedShape("unit_struct")
    return RecordShape(cls.__name__, cls, fields, build=cls.model_validate)


def _root_model_shape(cls: type[RootModel]) -> NewtypeShape:
    def unwrap(value: Any) -> Any:
        if not isinstance(value, cls):
            raise ValueError(f"expected a {cls.__name__}, got {type(value).__name__}")
        return value.root

    return NewtypeShape(cls.__name__, _field_annotation(cls.model_fields["root"]), wrap=cls, unwrap=unwrap)


def _field_annotation(info: FieldInfo) -> Any:
    # pydantic moves Annotated metadata off the annotation; put it back for describe()
    if info.metadata:
        return Annotated[(info.annotation, *info.metadata)]
    return info.annotation


def _identity(value: Any) -> Any:
    return value


__all__ = [
    "ScalarShape",
    "FieldSpec",
    "RecordShape",
    "MapShape",
    "VariantShape",
    "NewtypeShape",
    "RejectedShape",
    "Shape",
    "describe",
    "shape_of",
    "document_name",
]
