"""Entry points composing the lexer, parser, formatter and value bridges."""

from __future__ import annotations

from typing import Any, NotRequired, Optional, TypedDict, TypeVar, overload

from .de import Deserializer
from .document import VDFDocument
from .errors import DocumentNameError
from .formatter import VDFFormatter
from .lexer import LexerConfig, VDFLexer
from .nodes import KVBlock, KVValue
from .parser import ParserConfig, VDFParser
from .ser import BridgeConfig, Serializer
from .shapes import describe, document_name, shape_of
from .utils import resolve_config

T = TypeVar("T")


class CodecConfig(TypedDict):
    lexer_config: NotRequired[LexerConfig]
    parser_config: NotRequired[ParserConfig]
    bridge_config: NotRequired[BridgeConfig]


class CodecConfigRequired(TypedDict):
    lexer_config: LexerConfig
    parser_config: ParserConfig
    bridge_config: BridgeConfig


DEFAULT_CONFIG: CodecConfigRequired = {
    "lexer_config": {},
    "parser_config": {},
    "bridge_config": {},
}


def parse(text: str, config: Optional[CodecConfig] = None) -> KVBlock:
    """Parse VDF text into a block holding the document's single outer entry."""
    config = resolve_config(config or {}, DEFAULT_CONFIG)
    lexer = VDFLexer(text, config=config["lexer_config"])
    return VDFParser(lexer.iter_tokens(), config=config["parser_config"]).parse_document()


def render(tree: KVValue) -> str:
    """Render a tree in canonical layout (tabs, quoted keys and values)."""
    return VDFFormatter().format(tree)


def to_text(
    value: Any,
    name: Optional[str] = None,
    *,
    annotation: Any = None,
    config: Optional[CodecConfig] = None,
) -> str:
    """Serialize ``value`` as a VDF document.

    The outer key is ``name`` when given, otherwise the name of the value's
    type (record, newtype or enum class). Maps and scalars have no type name
    and need an explicit ``name``.
    """
    config = resolve_config(config or {}, DEFAULT_CONFIG)
    if annotation is None:
        annotation = Any
    root = Serializer(config["bridge_config"]).serialize(value, annotation)
    if name is None:
        shape = shape_of(value) if annotation is Any else describe(annotation)
        name = document_name(shape)
        if name is None:
            raise DocumentNameError(f"a document name is required to serialize a top-level {shape.name}")
    return render(VDFDocument(name, root).to_tree())


@overload
def from_text(text: str, cls: type[T], *, name: Optional[str] = None, config: Optional[CodecConfig] = None) -> T: ...


@overload
def from_text(text: str, cls: Any, *, name: Optional[str] = None, config: Optional[CodecConfig] = None) -> Any: ...


def from_text(text, cls, *, name=None, config=None):
    """Parse a VDF document and build a ``cls`` value from its outer value.

    The outer key is dropped; pass ``name`` to require a particular one.
    """
    config = resolve_config(config or {}, DEFAULT_CONFIG)
    document = VDFDocument.from_tree(parse(text, config=config))
    if name is not None:
        document.expect_name(name)
    return Deserializer(config["bridge_config"]).deserialize(document.root, cls)


__all__ = ["CodecConfig", "parse", "render", "to_text", "from_text"]
