from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator


class SnippetEntry(BaseModel):
    """One editor snippet. ``identifier`` is the document key, not a JSON field."""

    identifier: str = Field(exclude=True)
    prefix: str
    scope: str = ""
    body: List[str] = Field(default_factory=list)
    description: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class SnippetDocument(RootModel[Dict[str, SnippetEntry]]):
    """Snippets keyed by identifier, in document order."""

    @model_validator(mode="before")
    @classmethod
    def _inject_identifiers(cls, data: Any) -> Any:
        # Serialized documents carry the identifier only as the key.
        if not isinstance(data, Mapping):
            return data
        injected: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, Mapping) and "identifier" not in value:
                value = {**value, "identifier": key}
            injected[key] = value
        return injected

    def add(self, entry: SnippetEntry) -> None:
        if entry.identifier in self.root:
            raise KeyError(entry.identifier)
        self.root[entry.identifier] = entry

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.root

    def __getitem__(self, identifier: str) -> SnippetEntry:
        return self.root[identifier]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def to_json_dict(self) -> Dict[str, Dict[str, Any]]:
        return self.model_dump(mode="json")


__all__ = ["SnippetEntry", "SnippetDocument"]
