"""Canonical text rendering for KeyValues trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .nodes import KVBlock, KVEntry, KVValue


@dataclass
class VDFFormatter:
    indent: str = "\t"
    separator: str = "\t"

    def format(self, value: KVValue) -> str:
        """Render a leaf as one quoted string, or a block's entries line by line.

        A document is the block holding the single outer entry, rendered at
        level 0; the result carries no trailing newline.
        """
        if isinstance(value, KVBlock):
            return "\n".join(self.format_block(value))
        return self._format_scalar(value)

    def format_block(self, block: KVBlock, level: int = 0) -> list[str]:
        lines: list[str] = []
        stack: list[tuple[Iterator[KVEntry], int]] = [(iter(block.entries), level)]
        while stack:
            entries, depth = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                if stack:
                    lines.append(f"{self._indent(depth - 1)}}}")
                continue
            if isinstance(entry.value, KVBlock):
                lines.append(f"{self._indent(depth)}{self._format_scalar(entry.key)}")
                lines.append(f"{self._indent(depth)}{{")
                stack.append((iter(entry.value.entries), depth + 1))
            else:
                lines.append(self.format_entry(entry.key, entry.value, depth))
        return lines

    def format_entry(self, key: str, value: str, level: int) -> str:
        return f"{self._indent(level)}{self._format_scalar(key)}{self.separator}{self._format_scalar(value)}"

    def _format_scalar(self, text: str) -> str:
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'

    def _indent(self, level: int) -> str:
        return "" if level <= 0 else self.indent * level


__all__ = ["VDFFormatter"]
