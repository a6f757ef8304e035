from __future__ import annotations

from dataclasses import dataclass, replace
import math


@dataclass
class Range:
    """Numeric axis interval plus the pixel length it is mapped onto.

    Bounds stay `None` until resolved; `domain` is set by the layout once the
    canvas box size is known. A `descending` range maps `min` to the far end
    of the domain; pass one as an axis's explicit `range` to flip that axis.
    """

    min: float | None = None
    max: float | None = None
    domain: int = 0
    descending: bool = False

    def is_zero(self) -> bool:
        return self.min is None or self.max is None

    @property
    def delta(self) -> float:
        if self.min is None or self.max is None:
            return 0.0
        return self.max - self.min

    def set_min(self, value: float) -> None:
        self.min = float(value)

    def set_max(self, value: float) -> None:
        self.max = float(value)

    def set_domain(self, domain: int) -> None:
        self.domain = int(domain)

    def copy(self) -> "Range":
        return replace(self)

    def translate(self, value: float) -> int:
        """Pixel offset of `value` from the range origin along the domain."""
        if self.min is None:
            raise ValueError("range is not resolved")
        ratio = (value - self.min) / self.delta
        offset = int(math.ceil(ratio * self.domain))
        if self.descending:
            return self.domain - offset
        return offset

    def __str__(self) -> str:
        return f"Range [{self.min}, {self.max}] => {self.domain}"
