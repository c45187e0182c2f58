"""KeyValues lexer: turns VDF text into brace and string tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, NotRequired, Optional, TypedDict

from vdfcodec.errors import ParseError
from vdfcodec.logger import get_logger
from vdfcodec.utils import resolve_config


class TokenType(Enum):
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    STRING = auto()
    EOF = auto()


@dataclass(slots=True)
class Token:
    type: TokenType
    value: str | None
    line: int
    column: int
    quoted: bool = False


class LexerConfig(TypedDict):
    enable_logger: NotRequired[bool]
    skip_comments: NotRequired[bool]


class LexerConfigRequired(TypedDict):
    enable_logger: bool
    skip_comments: bool


DEFAULT_CONFIG: LexerConfigRequired = {
    "enable_logger": False,
    "skip_comments": True,
}

# separators outside quotes; other Unicode spaces are ordinary characters
WHITESPACE = frozenset(" \t\r\n\f\v")
# characters that end a bare word
DELIMITERS = frozenset('{}"')


class VDFLexer:
    def __init__(self, text: str, config: Optional[LexerConfig] = None):
        self.text = text
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = get_logger("vdfcodec.lexer", self.config["enable_logger"])
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self) -> list[Token]:
        return list(self.iter_tokens())

    def iter_tokens(self) -> Iterator[Token]:
        self.logger.info("Starting tokenization")
        while not self._is_eof:
            char = self._peek()
            if char in WHITESPACE:
                self._consume_whitespace()
                continue
            if char == "/" and self._peek(1) == "/" and self.config["skip_comments"]:
                self._consume_comment()
                continue
            if char in "{}":
                token = self._emit_brace(char)
            elif char == '"':
                token = self._emit_string()
            else:
                token = self._emit_bare_word()
            self.logger.debug("Token %s %r at %d:%d", token.type.name, token.value, token.line, token.column)
            yield token

        self.logger.info("Tokenization complete")
        yield Token(TokenType.EOF, None, self._line, self._column)

    def _consume_whitespace(self) -> None:
        while not self._is_eof and self._peek() in WHITESPACE:
            self._advance()

    def _consume_comment(self) -> None:
        while not self._is_eof and self._peek() != "\n":
            self._advance()

    def _emit_brace(self, char: str) -> Token:
        token_type = TokenType.OPEN_BRACE if char == "{" else TokenType.CLOSE_BRACE
        token = Token(token_type, char, self._line, self._column)
        self._advance()
        return token

    def _emit_string(self) -> Token:
        start_line, start_col = self._line, self._column
        self._advance()
        buffer: list[str] = []
        while not self._is_eof:
            char = self._advance()
            if char == '"':
                return Token(TokenType.STRING, "".join(buffer), start_line, start_col, quoted=True)
            if char == "\\" and not self._is_eof:
                escaped = self._advance()
                # only \\ and \" are escapes; any other pair is kept as written
                if escaped not in '\\"':
                    buffer.append(char)
                buffer.append(escaped)
            else:
                buffer.append(char)
        raise ParseError("Unterminated string", start_line, start_col)

    def _emit_bare_word(self) -> Token:
        start_line, start_col = self._line, self._column
        buffer = [self._advance()]
        while not self._is_eof and self._peek() not in WHITESPACE and self._peek() not in DELIMITERS:
            buffer.append(self._advance())
        return Token(TokenType.STRING, "".join(buffer), start_line, start_col)

    # Helpers -----------------------------------------------------------------
    @property
    def _is_eof(self) -> bool:
        return self._pos >= len(self.text)

    def _peek(self, ahead: int = 0) -> str:
        index = self._pos + ahead
        if index >= len(self.text):
            return "\0"
        return self.text[index]

    def _advance(self) -> str:
        char = self.text[self._pos]
        self._pos += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char


__all__ = ["VDFLexer", "LexerConfig", "Token", "TokenType"]
