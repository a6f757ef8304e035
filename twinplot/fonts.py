from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path
import threading

from PIL import ImageFont


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
BUNDLED_FONT_FAMILY = "pillow-default"
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
    "verdana",
    "notosans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

PillowFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


@dataclass(frozen=True)
class ChartFont:
    """A font face; `path=None` selects the font bundled with Pillow."""

    family: str
    path: Path | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> "ChartFont":
        font_path = Path(path)
        if not font_path.is_file():
            raise ValueError(f"font file not found: {font_path}")
        return cls(family=font_path.stem, path=font_path)

    @classmethod
    def system(cls, family: str) -> "ChartFont":
        return cls(family=family, path=resolve_font_path(family))

    def load(self, size_px: float) -> PillowFont:
        return _load_font(str(self.path) if self.path is not None else None, max(1, int(round(size_px))))


@lru_cache(maxsize=64)
def _load_font(path: str | None, size: int) -> PillowFont:
    if path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(path, size=size)
    except OSError:
        LOGGER.warning("could not load font %s, using bundled font", path)
        return ImageFont.load_default(size=size)


def resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))
    # Stable order so the same machine always picks the same face.
    candidates.sort(key=lambda p: (len(p.name), str(p)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            if stem == p or stem.startswith(p):
                return path
    return None


class _DefaultFontCache:
    """Process-wide default font, resolved at most once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._font: ChartFont | None = None

    def get(self) -> ChartFont:
        font = self._font
        if font is not None:
            return font
        with self._lock:
            if self._font is None:
                self._font = _resolve_default_font()
            return self._font

    def reset(self) -> None:
        with self._lock:
            self._font = None


def _resolve_default_font() -> ChartFont:
    path = resolve_font_path(DEFAULT_FONT_FAMILY)
    if path is None:
        LOGGER.warning("no system TrueType font found, falling back to the Pillow bundled font")
        return ChartFont(family=BUNDLED_FONT_FAMILY)
    return ChartFont(family=path.stem, path=path)


_DEFAULT_FONT = _DefaultFontCache()


def get_default_font() -> ChartFont:
    return _DEFAULT_FONT.get()
