from typing import Iterable, List, NotRequired, Optional, TypedDict

from vdfcodec.errors import ParseError
from vdfcodec.lexer import Token, TokenType
from vdfcodec.logger import get_logger
from vdfcodec.nodes import KVBlock, KVValue
from vdfcodec.utils import DEFAULT_MAX_DEPTH, resolve_config


class ParserConfig(TypedDict):
    enable_logger: NotRequired[bool]
    max_depth: NotRequired[int]


class ParserConfigRequired(TypedDict):
    enable_logger: bool
    max_depth: int


DEFAULT_CONFIG: ParserConfigRequired = {"enable_logger": False, "max_depth": DEFAULT_MAX_DEPTH}

_DESCRIPTIONS = {
    TokenType.OPEN_BRACE: "'{'",
    TokenType.CLOSE_BRACE: "'}'",
    TokenType.STRING: "string",
    TokenType.EOF: "end of input",
}


class VDFParser:
    """Builds a KVBlock tree from a token stream.

    The stream is pulled one token at a time, so a lazy ``VDFLexer.iter_tokens()``
    is never materialized. A document is a single ``key value`` pair; the result
    is a block holding that one entry.
    """

    def __init__(self, tokens: Iterable[Token], config: Optional[ParserConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = get_logger("vdfcodec.parser", self.config["enable_logger"])
        self._tokens = iter(tokens)
        self.current_token = Token(TokenType.EOF, None, 1, 1)
        self.advance()

    def advance(self) -> None:
        previous = self.current_token
        self.current_token = next(
            self._tokens, Token(TokenType.EOF, None, previous.line, previous.column)
        )

    def expect(self, expected_type: TokenType | List[TokenType], context: str) -> None:
        if not isinstance(expected_type, list):
            expected_type = [expected_type]
        token = self.current_token
        if token.type not in expected_type:
            wanted = " or ".join(_DESCRIPTIONS[t] for t in expected_type)
            raise ParseError(f"Expected {wanted} {context}, but got {self._describe(token)}", token.line, token.column)

    def consume(self, expected_type: TokenType | List[TokenType], context: str) -> Token:
        current_token = self.current_token
        self.expect(expected_type, context)
        self.advance()
        return current_token

    def parse_document(self) -> KVBlock:
        self.logger.info("Parsing document")
        if self.current_token.type == TokenType.EOF:
            raise ParseError("Empty document", self.current_token.line, self.current_token.column)
        key = self.consume(TokenType.STRING, "as the document name")
        document = KVBlock()
        document.add_entry(key.value, self._parse_value(key))
        self.expect(TokenType.EOF, "after the document")
        self.logger.info(f"Parsed document {key.value!r}")
        return document

    def _parse_value(self, key: Token) -> KVValue:
        value_token = self.consume([TokenType.STRING, TokenType.OPEN_BRACE], f"after key {key.value!r}")
        if value_token.type == TokenType.STRING:
            return value_token.value
        return self._parse_block(value_token)

    def _parse_block(self, open_token: Token) -> KVBlock:
        root = KVBlock()
        stack: list[tuple[KVBlock, Token]] = [(root, open_token)]
        max_depth = self.config["max_depth"]
        while stack:
            block, opener = stack[-1]
            token = self.current_token
            if token.type == TokenType.CLOSE_BRACE:
                self.advance()
                stack.pop()
                continue
            if token.type == TokenType.EOF:
                raise ParseError("Unclosed '{'", opener.line, opener.column)
            key = self.consume(TokenType.STRING, "as a key")
            value_token = self.consume([TokenType.STRING, TokenType.OPEN_BRACE], f"after key {key.value!r}")
            if value_token.type == TokenType.STRING:
                self.logger.debug(f"Entry {key.value!r} = {value_token.value!r}")
                block.add_entry(key.value, value_token.value)
                continue
            if len(stack) >= max_depth:
                raise ParseError(f"Nesting exceeds the maximum depth of {max_depth}", value_token.line, value_token.column)
            self.logger.debug(f"Block {key.value!r}")
            block.add_entry(key.value, KVBlock())
            stack.append((block.entries[-1].value, value_token))
        return root

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type == TokenType.STRING:
            return f"string {token.value!r}"
        return _DESCRIPTIONS[token.type]


__all__ = ["VDFParser", "ParserConfig"]
