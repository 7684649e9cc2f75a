"""
Rendering options for the graph printer
"""

from pydantic import BaseModel, ConfigDict, Field


class PrinterConfig(BaseModel):
    """Options controlling how type tables are laid out"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    padding: int = Field(default=1, ge=0)  # spaces on each side of a cell
    width: int = Field(default=100_000, gt=0)  # wider tables get squeezed by rich
    indent: str = "\t"  # prefix of every line after "<Type>:"
    tab_size: int = Field(default=8, gt=0)  # tabs inside cells expand to spaces
