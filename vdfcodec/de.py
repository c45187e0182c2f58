"""Deserialize a KeyValues tree into Python values."""

from __future__ import annotations

from typing import Any, Optional, TypeVar, overload

from .errors import (
    InvalidValue,
    MissingField,
    NestingTooDeep,
    ParseFailure,
    TypeMismatch,
    UnknownVariant,
    UnresolvedAnnotation,
    UnsupportedShape,
)
from .logger import get_logger
from .nodes import KVBlock, KVValue
from .scalars import parse_scalar
from .ser import DEFAULT_CONFIG, BridgeConfig, Path
from .shapes import MapShape, NewtypeShape, RecordShape, RejectedShape, ScalarShape, VariantShape, describe
from .utils import resolve_config

T = TypeVar("T")


class Deserializer:
    """Builds a value of a requested type from a tree.

    Record fields are looked up by key, first match wins, and every declared
    field must be present; keys the record doesn't declare are skipped. Map
    entries are inserted in document order, so a key repeated in the document
    keeps its last value.
    """

    def __init__(self, config: Optional[BridgeConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = get_logger("vdfcodec.de", self.config["enable_logger"])

    @overload
    def deserialize(self, tree: KVValue, annotation: type[T]) -> T: ...

    @overload
    def deserialize(self, tree: KVValue, annotation: Any) -> Any: ...

    def deserialize(self, tree, annotation):
        return self._visit(tree, annotation, (), 0)

    def _visit(self, tree: KVValue, annotation: Any, path: Path, depth: int) -> Any:
        if depth > self.config["max_depth"]:
            raise NestingTooDeep(self.config["max_depth"], path)
        try:
            shape = describe(annotation)
        except UnresolvedAnnotation as exc:
            raise UnresolvedAnnotation(exc.annotation, exc.owner, path) from exc
        match shape:
            case ScalarShape(kind=kind):
                text = self._expect_leaf(tree, shape.name, path)
                try:
                    return parse_scalar(kind, text)
                except ValueError as exc:
                    raise ParseFailure(text, shape.name, str(exc), path) from exc
            case RecordShape():
                return self._visit_record(tree, shape, path, depth)
            case MapShape():
                return self._visit_map(tree, shape, path, depth)
            case VariantShape():
                text = self._expect_leaf(tree, shape.name or "variant", path)
                if text not in shape.variants:
                    raise UnknownVariant(text, shape.variants, path)
                return shape.from_name(text)
            case NewtypeShape():
                inner = self._visit(tree, shape.inner, path, depth + 1)
                return self._build(shape.wrap, inner, path)
            case RejectedShape(name=name):
                raise UnsupportedShape(name, path)

    def _visit_record(self, tree: KVValue, shape: RecordShape, path: Path, depth: int) -> Any:
        block = self._expect_block(tree, shape.name, path)
        self.logger.debug(f"Deserializing record {shape.name} at {'.'.join(path) or '<root>'}")
        values: dict[str, Any] = {}
        for field in shape.fields:
            child = block.get(field.key)
            if child is None:
                raise MissingField(field.key, path)
            values[field.key] = self._visit(child, field.annotation, (*path, field.key), depth + 1)
        return self._build(shape.build, values, path)

    def _visit_map(self, tree: KVValue, shape: MapShape, path: Path, depth: int) -> Any:
        block = self._expect_block(tree, shape.name, path)
        key_shape = describe(shape.key)
        if isinstance(key_shape, (RecordShape, MapShape)):
            raise UnsupportedShape(f"{key_shape.name} as a map key", path)
        result = shape.build()
        for entry in block.entries:
            key = self._visit(entry.key, shape.key, (*path, entry.key), depth + 1)
            result[key] = self._visit(entry.value, shape.value, (*path, entry.key), depth + 1)
        return result

    def _expect_leaf(self, tree: KVValue, expected: str, path: Path) -> str:
        if isinstance(tree, KVBlock):
            raise TypeMismatch(f"a string for {expected}", "a block", path)
        return tree

    def _expect_block(self, tree: KVValue, expected: str, path: Path) -> KVBlock:
        if not isinstance(tree, KVBlock):
            raise TypeMismatch(f"a block for {expected}", f"the string {tree!r}", path)
        return tree

    def _build(self, factory: Any, argument: Any, path: Path) -> Any:
        try:
            return factory(argument)
        except (ValueError, TypeError) as exc:
            raise InvalidValue(str(exc), path) from exc


def from_tree(tree: KVValue, cls: Any, config: Optional[BridgeConfig] = None) -> Any:
    """Build a ``cls`` value from ``tree``."""
    return Deserializer(config).deserialize(tree, cls)


__all__ = ["Deserializer", "from_tree"]
