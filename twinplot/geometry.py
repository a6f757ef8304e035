from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Box:
    """Axis-aligned pixel rectangle; y grows downwards."""

    top: int = 0
    left: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def is_zero(self) -> bool:
        return self.top == 0 and self.left == 0 and self.right == 0 and self.bottom == 0

    def center(self) -> tuple[int, int]:
        return (self.left + (self.width >> 1), self.top + (self.height >> 1))

    def clone(self) -> "Box":
        return replace(self)

    def shift(self, dx: int, dy: int) -> "Box":
        return Box(top=self.top + dy, left=self.left + dx, right=self.right + dx, bottom=self.bottom + dy)

    def grow(self, other: "Box") -> "Box":
        """Smallest box enclosing both boxes."""
        return Box(
            top=min(self.top, other.top),
            left=min(self.left, other.left),
            right=max(self.right, other.right),
            bottom=max(self.bottom, other.bottom),
        )

    def outer_constrain(self, bounds: "Box", other: "Box") -> "Box":
        """Shrink this box by however far `other` spills past `bounds` on each side."""
        top, left, right, bottom = self.top, self.left, self.right, self.bottom
        if other.top < bounds.top:
            top = self.top + (bounds.top - other.top)
        if other.left < bounds.left:
            left = self.left + (bounds.left - other.left)
        if other.right > bounds.right:
            right = self.right - (other.right - bounds.right)
        if other.bottom > bounds.bottom:
            bottom = self.bottom - (other.bottom - bounds.bottom)
        return Box(top=top, left=left, right=right, bottom=bottom)
