"""
graphdesc - table descriptions of generated schema graphs
"""

from .config import PrinterConfig
from .errors import GraphDescError, GraphPrintError, RenderError, SchemaError
from .loader import load_graph, parse_graph
from .printer import GraphPrinter, fprint_graph, print_graph
from .schema import Edge, Field, Graph, Relation, Type

__version__ = '1.0.0'

__all__ = [
    # Model
    'Graph',
    'Type',
    'Field',
    'Edge',
    'Relation',
    # Loading
    'load_graph',
    'parse_graph',
    # Printing
    'PrinterConfig',
    'GraphPrinter',
    'fprint_graph',
    'print_graph',
    # Errors
    'GraphDescError',
    'SchemaError',
    'RenderError',
    'GraphPrintError',
]
