"""
Data model for per-frame inspection results.
All records are immutable and created fresh for every processed frame.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union


class Point2D(NamedTuple):
    x: float
    y: float

    def to_pixel(self) -> Tuple[int, int]:
        return int(self.x), int(self.y)


@dataclass(frozen=True)
class SheetRegion:
    """Axis-aligned bounding rectangle of the detected sheet."""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def top_left(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def bottom_right(self) -> Tuple[int, int]:
        return self.x + self.width, self.y + self.height


@dataclass(frozen=True)
class Hole:
    """A circular feature; index is the detection order within one frame only."""
    center: Point2D
    radius: int
    index: int

    @property
    def diameter(self) -> int:
        return self.radius * 2


class HoleCategory(Enum):
    NORMAL = "normal"
    COUNTERSUNK = "countersunk"
    ANODIZED = "anodized"

    @property
    def letter(self) -> str:
        return _CATEGORY_LETTERS[self]


_CATEGORY_LETTERS = {
    HoleCategory.NORMAL: "H",
    HoleCategory.COUNTERSUNK: "A",
    HoleCategory.ANODIZED: "Z",
}


@dataclass(frozen=True)
class SheetItem:
    width: int
    height: int


@dataclass(frozen=True)
class HoleItem:
    position: Point2D
    diameter: int


@dataclass(frozen=True)
class CounterboreItem:
    position: Point2D
    category: HoleCategory


DetectionItem = Union[SheetItem, HoleItem, CounterboreItem]


@dataclass(frozen=True)
class ClassifiedHole:
    hole: Hole
    category: HoleCategory

    @property
    def label(self) -> str:
        """Overlay label: category letter plus 1-based index, e.g. "Z1"."""
        return f"{self.category.letter}{self.hole.index + 1}"


@dataclass(frozen=True)
class DetectionResult:
    """Everything found in a single frame."""
    sheet: Optional[SheetRegion] = None
    holes: Tuple[ClassifiedHole, ...] = ()

    def items(self) -> List[DetectionItem]:
        items: List[DetectionItem] = []
        if self.sheet is not None:
            items.append(SheetItem(width=self.sheet.width, height=self.sheet.height))
        for classified in self.holes:
            hole = classified.hole
            items.append(HoleItem(position=hole.center, diameter=hole.diameter))
            items.append(CounterboreItem(position=hole.center, category=classified.category))
        return items

    def to_dict(self) -> Dict[str, Any]:
        sheet = None
        if self.sheet is not None:
            sheet = {
                "x": self.sheet.x,
                "y": self.sheet.y,
                "width": self.sheet.width,
                "height": self.sheet.height,
            }
        return {
            "sheet": sheet,
            "holes": [
                {
                    "index": c.hole.index,
                    "center": [c.hole.center.x, c.hole.center.y],
                    "radius": c.hole.radius,
                    "diameter": c.hole.diameter,
                    "category": c.category.value,
                    "label": c.label,
                }
                for c in self.holes
            ],
        }
