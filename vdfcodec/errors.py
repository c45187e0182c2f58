"""Exception hierarchy shared by the lexer, parser and value bridges."""

from __future__ import annotations

from typing import Iterable


class VDFError(Exception):
    """Base class for every error raised by vdfcodec."""


class ParseError(VDFError):
    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)


class BridgeError(VDFError):
    """Raised while converting between Python values and the KeyValues tree.

    ``path`` holds the keys leading from the document root to the value that
    failed, so ``("more_stuff", "coolness")`` points at a nested field.
    """

    def __init__(self, message: str, path: Iterable[str] = ()):
        self.message = message
        self.path = tuple(path)
        if self.path:
            message = f"{message} (at {'.'.join(self.path)})"
        super().__init__(message)


class UnsupportedShape(BridgeError):
    def __init__(self, shape: str, path: Iterable[str] = ()):
        self.shape = shape
        super().__init__(f"can't represent {shape} in VDF", path)


class TypeMismatch(BridgeError):
    def __init__(self, expected: str, found: str, path: Iterable[str] = ()):
        self.expected = expected
        self.found = found
        super().__init__(f"expected {expected}, found {found}", path)


class ParseFailure(BridgeError):
    def __init__(self, text: str, target: str, reason: str, path: Iterable[str] = ()):
        self.text = text
        self.target = target
        self.reason = reason
        super().__init__(f"could not parse {text!r} as {target}: {reason}", path)


class MissingField(BridgeError):
    def __init__(self, field: str, path: Iterable[str] = ()):
        self.field = field
        super().__init__(f"missing field {field!r}", path)


class UnknownVariant(BridgeError):
    def __init__(self, variant: str, expected: Iterable[str], path: Iterable[str] = ()):
        self.variant = variant
        self.expected = tuple(expected)
        super().__init__(f"unknown variant {variant!r}, expected one of {list(self.expected)}", path)


class InvalidValue(BridgeError):
    """A Python value does not fit the shape it is declared as."""


class UnresolvedAnnotation(BridgeError):
    """A record field annotation names a type that can't be looked up."""

    def __init__(self, annotation: str, owner: str, path: Iterable[str] = ()):
        self.annotation = annotation
        self.owner = owner
        super().__init__(f"can't resolve annotation {annotation!r} of {owner}", path)


class NestingTooDeep(BridgeError):
    def __init__(self, max_depth: int, path: Iterable[str] = ()):
        self.max_depth = max_depth
        super().__init__(f"nesting exceeds the maximum depth of {max_depth}", path)


class DocumentNameError(BridgeError):
    """The outer document key is missing, ambiguous or not the expected one."""


__all__ = [
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
