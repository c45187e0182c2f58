"""Node definitions for the KeyValues intermediate representation."""

from typing import overload

from pydantic import BaseModel, Field


KVLeaf = str


class KVEntry(BaseModel):
    key: str
    value: "KVValue"


class KVBlock(BaseModel):
    """Ordered key/value entries; the same key may appear more than once."""

    entries: list[KVEntry] = Field(default_factory=list)

    def add_entry(self, key: str, value: "KVValue") -> None:
        self.entries.append(KVEntry(key=key, value=value))

    @overload
    def get(self, key: str) -> "KVValue | None": ...

    @overload
    def get(self, key: str, default: "KVValue") -> "KVValue": ...

    def get(self, key, default=None):
        """First value stored under ``key``, in insertion order."""
        for entry in self.entries:
            if entry.key == key:
                return entry.value
        return default

    def get_all(self, key: str) -> list["KVValue"]:
        return [entry.value for entry in self.entries if entry.key == key]

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]


KVValue = KVLeaf | KVBlock

KVEntry.model_rebuild()
KVBlock.model_rebuild()


__all__ = ["KVLeaf", "KVEntry", "KVBlock", "KVValue"]
