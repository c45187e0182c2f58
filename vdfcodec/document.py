"""Top-level VDF document: one outer key around one value."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import DocumentNameError
from .nodes import KVBlock, KVValue


@dataclass
class VDFDocument:
    name: str
    root: KVValue

    @classmethod
    def from_tree(cls, tree: KVBlock) -> "VDFDocument":
        if len(tree.entries) != 1:
            raise DocumentNameError(f"a document holds exactly one outer key, found {len(tree.entries)}")
        entry = tree.entries[0]
        return cls(name=entry.key, root=entry.value)

    def to_tree(self) -> KVBlock:
        tree = KVBlock()
        tree.add_entry(self.name, self.root)
        return tree

    def expect_name(self, name: str) -> None:
        if self.name != name:
            raise DocumentNameError(f"expected document {name!r}, found {self.name!r}")
