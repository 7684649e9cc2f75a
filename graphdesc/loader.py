"""Load a graph description file into a :class:`~graphdesc.schema.Graph`.

The file is JSON with a ``types`` array. Edges name their target type, which
is resolved once every type has been read, so forward and self references
are allowed.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import SchemaError
from .schema import Edge, Field, Graph, Relation, Type

logger = logging.getLogger(__name__)


# --- Documents ---


class FieldDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    unique: bool = False
    optional: bool = False
    nillable: bool = False
    default: bool = False
    update_default: bool = False
    immutable: bool = False
    struct_tag: str = ""
    validators: List[str] = []
    comment: str = ""


class EdgeDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    inverse: str = ""
    rel: Relation = Relation.UNK
    unique: bool = False
    optional: bool = False
    comment: str = ""


class TypeDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    id: Optional[FieldDocument] = None
    fields: List[FieldDocument] = []
    edges: List[EdgeDocument] = []


class GraphDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    types: List[TypeDocument] = []


# --- Builder ---


def _build_field(doc: FieldDocument) -> Field:
    """Turn one field document into a Field."""
    return Field(
        name=doc.name,
        type=doc.type,
        unique=doc.unique,
        optional=doc.optional,
        nillable=doc.nillable,
        default=doc.default,
        update_default=doc.update_default,
        immutable=doc.immutable,
        struct_tag=doc.struct_tag,
        validators=list(doc.validators),
        comment=doc.comment,
    )


def _build_type(doc: TypeDocument) -> Type:
    """Turn one type document into a Type without its edges."""
    return Type(
        name=doc.name,
        id=_build_field(doc.id) if doc.id is not None else None,
        fields=[_build_field(f) for f in doc.fields],
    )


def _resolve_edges(doc: TypeDocument, owner: Type, types: Dict[str, Type]) -> None:
    for e in doc.edges:
        target = types.get(e.type)
        if target is None:
            raise SchemaError(f"edge {doc.name}.{e.name} references unknown type {e.type!r}")
        owner.edges.append(Edge(
            name=e.name,
            type=target,
            inverse=e.inverse,
            rel=e.rel,
            unique=e.unique,
            optional=e.optional,
            comment=e.comment,
        ))


def parse_graph(data: Any) -> Graph:
    """Build a Graph from an already decoded graph description."""
    try:
        doc = GraphDocument.model_validate(data)
    except ValidationError as e:
        raise SchemaError(f"invalid graph description: {e}") from e

    types: Dict[str, Type] = {}
    for t in doc.types:
        if t.name in types:
            raise SchemaError(f"duplicate type {t.name!r}")
        types[t.name] = _build_type(t)
    for t in doc.types:
        _resolve_edges(t, types[t.name], types)

    graph = Graph(types[t.name] for t in doc.types)
    logger.debug("Loaded graph with %d types", len(graph))
    return graph


def load_graph(path: str | Path) -> Graph:
    """Read and parse the graph description stored at ``path``."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SchemaError(f"{path}: cannot read graph description: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaError(f"{path}: invalid JSON: {e}") from e
    try:
        return parse_graph(raw)
    except SchemaError as e:
        raise SchemaError(f"{path}: {e}") from e
