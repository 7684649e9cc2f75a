"""In-memory model of a generated schema graph: types, fields and edges."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator


# --- Data models ---


class Relation(str, Enum):
    """Cardinality of an edge."""

    UNK = "Unk"
    O2O = "O2O"
    O2M = "O2M"
    M2O = "M2O"
    M2M = "M2M"

    def __str__(self) -> str:
        return self.value


@dataclass
class Field:
    """A single typed attribute of a schema type."""

    name: str
    type: str
    unique: bool = False
    optional: bool = False
    nillable: bool = False
    default: bool = False
    update_default: bool = False
    immutable: bool = False
    struct_tag: str = ""
    validators: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class Edge:
    """A relation from one type to another.

    ``inverse`` holds the name of the edge this one is the back-reference of,
    and is empty for edges declared in the forward direction.
    """

    name: str
    type: Type = field(repr=False, compare=False)
    inverse: str = ""
    rel: Relation = Relation.UNK
    unique: bool = False
    optional: bool = False
    comment: str = ""

    @property
    def is_inverse(self) -> bool:
        return self.inverse != ""


@dataclass
class Type:
    """A schema entity with its identifier, fields and edges."""

    name: str
    id: Field | None = None
    fields: list[Field] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def __getitem__(self, name: str) -> Field:
        if self.id is not None and self.id.name == name:
            return self.id
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)


class Graph:
    """Ordered collection of schema types."""

    def __init__(self, types: Iterable[Type] = ()) -> None:
        self.types: list[Type] = list(types)

    def __getitem__(self, name: str) -> Type:
        found = self.by_name(name)
        if found is None:
            raise KeyError(name)
        return found

    def __iter__(self) -> Iterator[Type]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def by_name(self, name: str) -> Type | None:
        """Find a type by its name (e.g. ``"User"``)."""
        return next((t for t in self.types if t.name == name), None)
