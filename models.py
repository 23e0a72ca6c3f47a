"""Data models for development register extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

APPLICATION_NUMBER_PATTERN = re.compile(r"[0-9]+/[0-9]+/[0-9]+")


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle in page coordinates."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextElement:
    """A positioned fragment of text on a page."""
    text: str
    x: float
    y: float
    width: float
    height: float


@dataclass
class Cell:
    """A grid rectangle formed by two adjacent horizontal and two adjacent vertical lines."""
    x: float
    y: float
    width: float
    height: float
    elements: List[TextElement] = field(default_factory=list)

    @property
    def texts(self) -> List[str]:
        return [element.text for element in self.elements]


class LineOrientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    UNCLASSIFIED = "unclassified"


class OperatorKind(Enum):
    """Drawing operations understood by the line extractor."""
    SAVE = "save"
    RESTORE = "restore"
    TRANSFORM = "transform"
    CONSTRUCT_PATH = "constructPath"
    FILL = "fill"
    EO_FILL = "eoFill"


class PathOp(Enum):
    """Sub-operations of a path construction, valued by their argument count."""
    MOVE_TO = ("moveTo", 2)
    LINE_TO = ("lineTo", 2)
    CURVE_TO = ("curveTo", 6)
    CLOSE_PATH = ("closePath", 0)
    RECTANGLE = ("rectangle", 4)

    @property
    def argument_count(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class Operation:
    """One entry of a page's decoded operator stream.

    TRANSFORM carries six matrix numbers in ``args``. CONSTRUCT_PATH carries
    its sub-operations in ``path_ops`` and their flat argument buffer in ``args``.
    """
    kind: OperatorKind
    args: Tuple[float, ...] = ()
    path_ops: Tuple[PathOp, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is OperatorKind.TRANSFORM and len(self.args) != 6:
            raise ValueError(f"transform requires 6 arguments, got {len(self.args)}")


@dataclass(frozen=True)
class TextRun:
    """A decoded text item: the string, its 6-number text transform and its width."""
    text: str
    transform: Tuple[float, float, float, float, float, float]
    width: float

    def __post_init__(self) -> None:
        if len(self.transform) != 6:
            raise ValueError(f"transform must have 6 elements, got {len(self.transform)}")


class Column(Enum):
    """Columns of the development register table, valued by their printed heading."""
    APPLICATION_NUMBER = "D/A Number"
    RECEIVED_DATE = "Received"
    LEGAL_DESCRIPTION = "Allotment or Section"
    STREET_NAME = "Street Name"
    SUBURB_NAME = "Town"
    DESCRIPTION = "Proposal"

    @property
    def title(self) -> str:
        return self.value


@dataclass
class DevelopmentApplication:
    """A development application parsed from one register row."""
    application_number: str
    address: str
    description: str
    information_url: str
    comment_url: str
    scrape_date: str
    received_date: str = ""
    legal_description: str = ""

    def __post_init__(self) -> None:
        """Validate DevelopmentApplication data after initialization."""
        if not APPLICATION_NUMBER_PATTERN.search(self.application_number):
            raise ValueError(
                f"application_number must look like 910/144/16, got {self.application_number!r}"
            )

        if not self.address.strip():
            raise ValueError("address must not be empty")
