"""Serialize Python values into a KeyValues tree."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NotRequired, Optional, TypedDict

from .errors import InvalidValue, NestingTooDeep, UnresolvedAnnotation, UnsupportedShape
from .logger import get_logger
from .nodes import KVBlock, KVValue
from .scalars import render_scalar
from .shapes import MapShape, NewtypeShape, RecordShape, RejectedShape, ScalarShape, VariantShape, describe, shape_of
from .utils import DEFAULT_MAX_DEPTH, resolve_config

Path = tuple[str, ...]


class BridgeConfig(TypedDict):
    enable_logger: NotRequired[bool]
    max_depth: NotRequired[int]


class BridgeConfigRequired(TypedDict):
    enable_logger: bool
    max_depth: int


DEFAULT_CONFIG: BridgeConfigRequired = {"enable_logger": False, "max_depth": DEFAULT_MAX_DEPTH}


class Serializer:
    """Walks a value by its shape and builds the matching tree.

    Nothing is emitted for a value that contains an unsupported shape: the
    error is raised before the (partial) tree ever leaves the serializer.
    """

    def __init__(self, config: Optional[BridgeConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = get_logger("vdfcodec.ser", self.config["enable_logger"])

    def serialize(self, value: Any, annotation: Any = Any) -> KVValue:
        return self._visit(value, annotation, (), 0)

    def _visit(self, value: Any, annotation: Any, path: Path, depth: int) -> KVValue:
        if depth > self.config["max_depth"]:
            raise NestingTooDeep(self.config["max_depth"], path)
        try:
            shape = shape_of(value) if annotation is Any else describe(annotation)
        except UnresolvedAnnotation as exc:
            raise UnresolvedAnnotation(exc.annotation, exc.owner, path) from exc
        match shape:
            case ScalarShape(kind=kind):
                try:
                    return render_scalar(kind, value)
                except ValueError as exc:
                    raise InvalidValue(str(exc), path) from exc
            case RecordShape():
                return self._visit_record(value, shape, path, depth)
            case MapShape():
                return self._visit_map(value, shape, path, depth)
            case VariantShape():
                try:
                    return shape.to_name(value)
                except ValueError as exc:
                    raise InvalidValue(str(exc), path) from exc
            case NewtypeShape():
                try:
                    inner = shape.unwrap(value)
                except ValueError as exc:
                    raise InvalidValue(str(exc), path) from exc
                return self._visit(inner, shape.inner, path, depth + 1)
            case RejectedShape(name=name):
                raise UnsupportedShape(name, path)

    def _visit_record(self, value: Any, shape: RecordShape, path: Path, depth: int) -> KVBlock:
        if not isinstance(value, shape.cls):
            raise InvalidValue(f"expected a {shape.name}, got {type(value).__name__}", path)
        self.logger.debug(f"Serializing record {shape.name} at {'.'.join(path) or '<root>'}")
        block = KVBlock()
        for field in shape.fields:
            child = getattr(value, field.name)
            block.add_entry(field.key, self._visit(child, field.annotation, (*path, field.key), depth + 1))
        return block

    def _visit_map(self, value: Any, shape: MapShape, path: Path, depth: int) -> KVBlock:
        if not isinstance(value, Mapping):
            raise InvalidValue(f"expected a mapping, got {type(value).__name__}", path)
        block = KVBlock()
        for key, item in value.items():
            key_text = self._visit_key(key, shape.key, path, depth)
            block.add_entry(key_text, self._visit(item, shape.value, (*path, key_text), depth + 1))
        return block

    def _visit_key(self, key: Any, annotation: Any, path: Path, depth: int) -> str:
        shape = shape_of(key) if annotation is Any else describe(annotation)
        if isinstance(shape, (RecordShape, MapShape)):
            raise UnsupportedShape(f"{shape.name} as a map key", path)
        key_text = self._visit(key, annotation, path, depth + 1)
        if not isinstance(key_text, str):
            raise InvalidValue(f"map key {key!r} does not encode to a single string", path)
        return key_text


def to_tree(value: Any, annotation: Any = Any, config: Optional[BridgeConfig] = None) -> KVValue:
    """Serialize ``value`` into a tree; ``annotation`` pins its shape when given."""
    return Serializer(config).serialize(value, annotation)


__all__ = ["Serializer", "BridgeConfig", "to_tree"]
