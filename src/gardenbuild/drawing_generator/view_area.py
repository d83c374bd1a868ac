"""
ViewArea class for rectangular regions reserved on the composite sheet.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ViewArea:
    """
    A rectangular region of the sheet reserved for one view.

    Coordinates are in whatever space the owner uses (sheet mm while
    planning, drawing units once the layout scale is applied). The layout
    planner grows areas from bounds and checks them pairwise for overlap.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width of the area
        height: Height of the area
    """
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bounds(cls, left: float, top: float, right: float, bottom: float) -> "ViewArea":
        return cls(x=left, y=top, width=right - left, height=bottom - top)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Point test with inclusive edges."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def overlaps(self, other: "ViewArea") -> bool:
        """True if the two areas share any interior point; touching edges do not count."""
        return not (
            self.right <= other.left
            or other.right <= self.left
            or self.bottom <= other.top
            or other.bottom <= self.top
        )

    def scaled(self, factor: float) -> "ViewArea":
        """Sheet mm -> drawing units (or any uniform rescale)."""
        return ViewArea(self.x * factor, self.y * factor, self.width * factor, self.height * factor)
