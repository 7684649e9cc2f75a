"""
Custom exceptions for graphdesc
"""

from __future__ import annotations

from typing import List


class GraphDescError(Exception):
    """Base exception for all graphdesc errors"""
    pass


class SchemaError(GraphDescError):
    """A graph description could not be loaded"""
    pass


class RenderError(GraphDescError):
    """Rendering or writing the description of one type failed"""
    def __init__(self, type_name: str, stage: str, message: str):
        self.type_name = type_name
        self.stage = stage
        super().__init__(f"[{type_name}] {stage}: {message}")


class GraphPrintError(GraphDescError):
    """One or more types could not be printed"""
    def __init__(self, failures: List[RenderError]):
        self.failures = list(failures)
        names = ", ".join(f.type_name for f in self.failures)
        super().__init__(f"failed to print {len(self.failures)} type(s): {names}; first error: {self.first}")

    @property
    def first(self) -> RenderError:
        return self.failures[0]
