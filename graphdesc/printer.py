"""Table description of a schema graph.

Every type of the graph is written as a block::

    Type:
            <Fields Table>
            <Edges Table>

The edges table is left out for types without edges.
"""

from __future__ import annotations

import io
import logging
import re
import sys
from typing import Any, Callable, NamedTuple, Optional, Protocol, Sequence, TextIO

from rich import box, errors
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import PrinterConfig
from .errors import GraphPrintError, RenderError

logger = logging.getLogger(__name__)


# --- What the printer needs from a graph ---


class FieldLike(Protocol):
    name: str
    type: Any
    unique: bool
    optional: bool
    nillable: bool
    default: bool
    update_default: bool
    immutable: bool
    struct_tag: str
    validators: Any
    comment: Optional[str]


class TargetLike(Protocol):
    name: str


class EdgeLike(Protocol):
    name: str
    type: TargetLike
    inverse: str
    rel: Any
    unique: bool
    optional: bool
    comment: Optional[str]

    @property
    def is_inverse(self) -> bool: ...


class TypeLike(Protocol):
    name: str
    id: Optional[FieldLike]
    fields: Sequence[FieldLike]
    edges: Sequence[EdgeLike]


class GraphLike(Protocol):
    types: Sequence[TypeLike]


# --- Columns ---


class Column(NamedTuple):
    header: str
    extract: Callable[[Any], Any]


FIELD_COLUMNS = (
    Column("Field", lambda f: f.name),
    Column("Type", lambda f: f.type),
    Column("Unique", lambda f: f.unique),
    Column("Optional", lambda f: f.optional),
    Column("Nillable", lambda f: f.nillable),
    Column("Default", lambda f: f.default),
    Column("UpdateDefault", lambda f: f.update_default),
    Column("Immutable", lambda f: f.immutable),
    Column("StructTag", lambda f: f.struct_tag),
    Column("Validators", lambda f: f.validators),
    Column("Comment", lambda f: f.comment),
)

EDGE_COLUMNS = (
    Column("Edge", lambda e: e.name),
    Column("Type", lambda e: e.type.name),
    Column("Inverse", lambda e: e.is_inverse),
    Column("BackRef", lambda e: e.inverse),
    Column("Relation", lambda e: e.rel),
    Column("Unique", lambda e: e.unique),
    Column("Optional", lambda e: e.optional),
    Column("Comment", lambda e: e.comment),
)


def format_cell(value: Any) -> str:
    """Stringify a cell value; booleans are always ``true``/``false``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(format_cell(v) for v in value)
    return str(value)


_INTEGER = re.compile(r"[+-]?[0-9]+")


def _is_integer(s: str) -> bool:
    return _INTEGER.fullmatch(s) is not None


def column_alignments(rows: Sequence[Sequence[str]], width: int) -> list[str]:
    """Right-align a column only when every body cell in it is an integer.

    The last column (Comment) is always left-aligned.
    """
    if not rows:
        return ["left"] * width
    return [
        "right" if i < width - 1 and all(_is_integer(row[i]) for row in rows) else "left"
        for i in range(width)
    ]


def build_rows(columns: Sequence[Column], items: Sequence[Any]) -> list[list[str]]:
    return [[format_cell(c.extract(item)) for c in columns] for item in items]


# --- Printer ---


class GraphPrinter:
    """Writes a table description of every type in a graph to a sink."""

    def __init__(self, sink: TextIO, config: Optional[PrinterConfig] = None) -> None:
        self.sink = sink
        self.config = config or PrinterConfig()

    def print(self, graph: GraphLike) -> None:
        """Print every type of ``graph`` in its stored order.

        A type that fails to render writes nothing and the remaining types are
        still printed. All failures are raised together as a GraphPrintError
        once the graph has been walked.
        """
        failures: list[RenderError] = []
        for t in graph.types:
            try:
                block = self.describe(t)
            except RenderError as e:
                logger.warning("Skipping type %s: %s", t.name, e)
                failures.append(e)
                continue
            try:
                self.sink.write(block)
            except (OSError, ValueError) as e:
                err = RenderError(t.name, "write", str(e))
                logger.warning("Skipping type %s: %s", t.name, err)
                failures.append(err)
        if failures:
            raise GraphPrintError(failures)

    def describe(self, t: TypeLike) -> str:
        """Return the description block of a single type."""
        b = io.StringIO()
        b.write(t.name + ":\n")

        ids = [t.id] if t.id is not None else []
        fields = build_rows(FIELD_COLUMNS, ids + list(t.fields))
        b.write(self._render(t.name, "fields", FIELD_COLUMNS, fields,
                             column_alignments(fields, len(FIELD_COLUMNS))))

        if t.edges:
            edges = build_rows(EDGE_COLUMNS, t.edges)
            b.write(self._render(t.name, "edges", EDGE_COLUMNS, edges))

        logger.debug("Rendered type %s (%d fields, %d edges)", t.name, len(fields), len(t.edges))
        return b.getvalue().replace("\n", "\n" + self.config.indent) + "\n"

    def _render(
        self,
        type_name: str,
        stage: str,
        columns: Sequence[Column],
        rows: Sequence[Sequence[str]],
        alignments: Optional[Sequence[str]] = None,
    ) -> str:
        """Render one ASCII table and return its text."""
        table = Table(
            box=box.ASCII2,
            padding=(0, self.config.padding),
            header_style="",
            highlight=False,
        )
        for i, c in enumerate(columns):
            justify = alignments[i] if alignments else "left"
            table.add_column(Text(c.header), justify=justify, no_wrap=True)
        for row in rows:
            table.add_row(*(Text(cell.expandtabs(self.config.tab_size)) for cell in row))

        out = io.StringIO()
        console = Console(
            file=out,
            width=self.config.width,
            color_system=None,
            force_terminal=False,
            force_jupyter=False,
            no_color=True,
            markup=False,
            emoji=False,
            highlight=False,
            legacy_windows=False,
        )
        try:
            console.print(table)
        except (errors.ConsoleError, errors.StyleError) as e:
            raise RenderError(type_name, stage, str(e)) from e
        return out.getvalue()


def fprint_graph(sink: TextIO, graph: GraphLike, config: Optional[PrinterConfig] = None) -> None:
    """Print a table description of ``graph`` to ``sink``."""
    GraphPrinter(sink, config).print(graph)


def print_graph(graph: GraphLike, config: Optional[PrinterConfig] = None) -> None:
    """Print a table description of ``graph`` to standard output."""
    fprint_graph(sys.stdout, graph, config)
