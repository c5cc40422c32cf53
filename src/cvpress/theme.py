"""Color theme derivation from a single brand color.

The backend only draws flat fills, so gradients and translucent overlays are
approximated with :func:`mix` and :func:`gradient_bands`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BRAND = "#2563eb"
DARKEN_AMOUNT = 28

INK = "#0f172a"  # slate-900
MUTED = "#475569"  # slate-600
BORDER = "#e2e8f0"  # slate-200
BG_SOFT = "#f1f5f9"  # slate-100
HAIR = "#cbd5e1"  # slate-300
WHITE = "#ffffff"

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class PdfColors:
    brand: str
    brand_dark: str
    ink: str = INK
    muted: str = MUTED
    border: str = BORDER
    bg_soft: str = BG_SOFT
    hair: str = HAIR


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def normalize_hex(value: str | None) -> str:
    """Return ``#rrggbb`` for a 3- or 6-digit hex string, or the default brand."""
    h = (value or "").strip()
    if not h.startswith("#"):
        h = f"#{h}"
    if len(h) == 4:
        h = f"#{h[1]}{h[1]}{h[2]}{h[2]}{h[3]}{h[3]}"
    if not _HEX_RE.match(h):
        logger.debug("Invalid brand color %r, using %s", value, DEFAULT_BRAND)
        return DEFAULT_BRAND
    return h.lower()


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    h = normalize_hex(value)[1:]
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    def channel(x: float) -> str:
        return f"{int(_clamp(round(x), 0, 255)):02x}"

    return f"#{channel(r)}{channel(g)}{channel(b)}"


def darken(value: str, amount: int = DARKEN_AMOUNT) -> str:
    """Subtract ``amount`` from every channel, clamping to [0, 255]."""
    r, g, b = hex_to_rgb(value)
    return rgb_to_hex(r - amount, g - amount, b - amount)


def mix(a: str, b: str, t: float) -> str:
    """Linear interpolation between two colors; ``t=0`` gives ``a``, ``t=1`` gives ``b``."""
    t = _clamp(t, 0.0, 1.0)
    ra, ga, ba = hex_to_rgb(a)
    rb, gb, bb = hex_to_rgb(b)
    return rgb_to_hex(ra + (rb - ra) * t, ga + (gb - ga) * t, ba + (bb - ba) * t)


def gradient_bands(
    start: str,
    end: str,
    steps: int,
) -> list[str]:
    """Colors for ``steps`` flat bands going from ``start`` to ``end``."""
    if steps <= 1:
        return [normalize_hex(start)]
    return [mix(start, end, i / (steps - 1)) for i in range(steps)]


def make_colors(brand_hex: str | None) -> PdfColors:
    """Expand one brand color into the full document palette."""
    brand = normalize_hex(brand_hex)
    return PdfColors(brand=brand, brand_dark=darken(brand, DARKEN_AMOUNT))
