"""Valve KeyValues (VDF) text codec for typed Python values."""

from .api import CodecConfig, from_text, parse, render, to_text
from .de import Deserializer, from_tree
from .document import VDFDocument
from .errors import (
    BridgeError,
    DocumentNameError,
    InvalidValue,
    MissingField,
    NestingTooDeep,
    ParseError,
    ParseFailure,
    TypeMismatch,
    UnknownVariant,
    UnresolvedAnnotation,
    UnsupportedShape,
    VDFError,
)
from .formatter import VDFFormatter
from .lexer import VDFLexer, Token, TokenType
from .nodes import KVBlock, KVEntry, KVLeaf, KVValue
from .parser import VDFParser
from .scalars import F32, F64, I8, I16, I32, I64, U8, U16, U32, U64, Char, ScalarKind
from .ser import Serializer, to_tree
from .shapes import (
    MapShape,
    NewtypeShape,
    RecordShape,
    RejectedShape,
    ScalarShape,
    VariantShape,
    describe,
)

__all__ = [
    "CodecConfig",
    "parse",
    "render",
    "to_text",
    "from_text",
    "to_tree",
    "from_tree",
    "Serializer",
    "Deserializer",
    "VDFDocument",
    "VDFFormatter",
    "VDFLexer",
    "VDFParser",
    "Token",
    "TokenType",
    "KVBlock",
    "KVEntry",
    "KVLeaf",
    "KVValue",
    "ScalarKind",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
    "F32",
    "F64",
    "Char",
    "ScalarShape",
    "RecordShape",
    "MapShape",
    "VariantShape",
    "NewtypeShape",
    "RejectedShape",
    "describe",
    "VDFError",
    "ParseError",
    "BridgeError",
    "UnsupportedShape",
    "TypeMismatch",
    "ParseFailure",
    "MissingField",
    "UnknownVariant",
    "InvalidValue",
    "UnresolvedAnnotation",
    "NestingTooDeep",
    "DocumentNameError",
]
