"""Vector icons and language flags drawn with fpdf2 primitives.

Every glyph is built from flat fills and strokes inside a ``size`` box whose
top-left corner is ``(x, y)``. Flags are simplified to recognisable stripes.
"""

from __future__ import annotations

from fpdf import FPDF

from cvpress.layout.document import Flag, Icon
from cvpress.theme import HAIR, WHITE, hex_to_rgb


def fill(pdf: FPDF, color: str) -> None:
    pdf.set_fill_color(*hex_to_rgb(color))


def stroke(pdf: FPDF, color: str, width: float) -> None:
    pdf.set_draw_color(*hex_to_rgb(color))
    pdf.set_line_width(width)


# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------


def _calendar(pdf: FPDF, x: float, y: float, s: float, color: str) -> None:
    stroke(pdf, color, s * 0.08)
    fill(pdf, color)
    pdf.rect(x + s * 0.08, y + s * 0.18, s * 0.84, s * 0.74, style="D")
    pdf.rect(x + s * 0.08, y + s * 0.18, s * 0.84, s * 0.2, style="F")
    pdf.rect(x + s * 0.25, y + s * 0.06, s * 0.1, s * 0.2, style="F")
    pdf.rect(x + s * 0.65, y + s * 0.06, s * 0.1, s * 0.2, style="F")
    for row in range(2):
        for col in range(3):
            pdf.rect(
                x + s * (0.22 + col * 0.22),
                y + s * (0.5 + row * 0.2),
                s * 0.12,
                s * 0.1,
                style="F",
            )


def _pin(pdf: FPDF, x: float, y: float, s: float, color: str) -> None:
    fill(pdf, color)
    cx, cy, r = x + s / 2, y + s * 0.38, s * 0.3
    pdf.circle(cx, cy, r, style="F")
    pdf.polygon(
        [(cx - r * 0.85, cy + r * 0.5), (cx + r * 0.85, cy + r * 0.5), (cx, y + s * 0.98)],
        style="F",
    )
    fill(pdf, WHITE)
    pdf.circle(cx, cy, r * 0.4, style="F")


def _cap(pdf: FPDF, x: float, y: float, s: float, color: str) -> None:
    fill(pdf, color)
    pdf.polygon(
        [
            (x, y + s * 0.38),
            (x + s / 2, y + s * 0.14),
            (x + s, y + s * 0.38),
            (x + s / 2, y + s * 0.62),
        ],
        style="F",
    )
    pdf.polygon(
        [
            (x + s * 0.22, y + s * 0.5),
            (x + s * 0.78, y + s * 0.5),
            (x + s * 0.78, y + s * 0.78),
            (x + s * 0.22, y + s * 0.78),
        ],
        style="F",
    )
    stroke(pdf, color, s * 0.06)
    pdf.line(x + s * 0.9, y + s * 0.4, x + s * 0.9, y + s * 0.8)


def _medal(pdf: FPDF, x: float, y: float, s: float, color: str) -> None:
    fill(pdf, color)
    pdf.polygon(
        [(x + s * 0.2, y), (x + s * 0.42, y), (x + s * 0.56, y + s * 0.42), (x + s * 0.38, y + s * 0.46)],
        style="F",
    )
    pdf.polygon(
        [(x + s * 0.58, y), (x + s * 0.8, y), (x + s * 0.62, y + s * 0.46), (x + s * 0.44, y + s * 0.42)],
        style="F",
    )
    pdf.circle(x + s / 2, y + s * 0.68, s * 0.3, style="F")
    fill(pdf, WHITE)
    pdf.circle(x + s / 2, y + s * 0.68, s * 0.14, style="F")


def _globe(pdf: FPDF, x: float, y: float, s: float, color: str) -> None:
    stroke(pdf, color, s * 0.08)
    cx, cy, r = x + s / 2, y + s / 2, s * 0.44
    pdf.circle(cx, cy, r, style="D")
    pdf.ellipse(cx - r * 0.45, cy - r, r * 0.9, 2 * r, style="D")
    pdf.line(cx - r, cy, cx + r, cy)
    pdf.line(cx, cy - r, cx, cy + r)


def _user(pdf: FPDF, x: float, y: float, s: float, color: str) -> None:
    fill(pdf, color)
    pdf.circle(x + s / 2, y + s * 0.3, s * 0.22, style="F")
    pdf.polygon(
        [
            (x + s * 0.1, y + s * 0.98),
            (x + s * 0.2, y + s * 0.66),
            (x + s * 0.36, y + s * 0.56),
            (x + s * 0.64, y + s * 0.56),
            (x + s * 0.8, y + s * 0.66),
            (x + s * 0.9, y + s * 0.98),
        ],
        style="F",
    )


_ICONS = {
    Icon.CALENDAR: _calendar,
    Icon.PIN: _pin,
    Icon.CAP: _cap,
    Icon.MEDAL: _medal,
    Icon.GLOBE: _globe,
    Icon.USER: _user,
}


def draw_icon(pdf: FPDF, icon: Icon, x: float, y: float, size: float, color: str) -> None:
    _ICONS[icon](pdf, x, y, size, color)


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------


def _vertical(pdf: FPDF, x, y, w, h, colors: list[tuple[str, float]]) -> None:
    cx = x
    for color, share in colors:
        fill(pdf, color)
        pdf.rect(cx, y, w * share, h, style="F")
        cx += w * share


def _horizontal(pdf: FPDF, x, y, w, h, colors: list[tuple[str, float]]) -> None:
    cy = y
    for color, share in colors:
        fill(pdf, color)
        pdf.rect(x, cy, w, h * share, style="F")
        cy += h * share


def _flag_en(pdf: FPDF, x, y, w, h) -> None:
    fill(pdf, "#012169")
    pdf.rect(x, y, w, h, style="F")
    stroke(pdf, WHITE, h * 0.2)
    pdf.line(x, y, x + w, y + h)
    pdf.line(x, y + h, x + w, y)
    stroke(pdf, "#c8102e", h * 0.07)
    pdf.line(x, y, x + w, y + h)
    pdf.line(x, y + h, x + w, y)
    fill(pdf, WHITE)
    pdf.rect(x + w * 0.4, y, w * 0.2, h, style="F")
    pdf.rect(x, y + h * 0.35, w, h * 0.3, style="F")
    fill(pdf, "#c8102e")
    pdf.rect(x + w * 0.44, y, w * 0.12, h, style="F")
    pdf.rect(x, y + h * 0.41, w, h * 0.18, style="F")


def _flag_pt(pdf: FPDF, x, y, w, h) -> None:
    _vertical(pdf, x, y, w, h, [("#006600", 0.4), ("#ff0000", 0.6)])
    fill(pdf, "#ffcc00")
    pdf.circle(x + w * 0.4, y + h / 2, h * 0.22, style="F")


def _flag_ar(pdf: FPDF, x, y, w, h) -> None:
    fill(pdf, "#007a3d")
    pdf.rect(x, y, w, h, style="F")
    fill(pdf, WHITE)
    pdf.circle(x + w * 0.45, y + h / 2, h * 0.26, style="F")
    fill(pdf, "#007a3d")
    pdf.circle(x + w * 0.52, y + h * 0.46, h * 0.22, style="F")


def _flag_zh(pdf: FPDF, x, y, w, h) -> None:
    fill(pdf, "#de2910")
    pdf.rect(x, y, w, h, style="F")
    fill(pdf, "#ffde00")
    pdf.star(x + w * 0.22, y + h * 0.3, h * 0.07, h * 0.17, 5, rotate_degrees=180, style="F")


def _flag_generic(pdf: FPDF, x, y, w, h) -> None:
    fill(pdf, "#e2e8f0")
    pdf.rect(x, y, w, h, style="F")
    s = h * 0.86
    _globe(pdf, x + (w - s) / 2, y + (h - s) / 2, s, "#64748b")


def draw_flag(pdf: FPDF, flag: Flag, x: float, y: float, w: float, h: float) -> None:
    if flag is Flag.FR:
        _vertical(pdf, x, y, w, h, [("#0055a4", 1 / 3), (WHITE, 1 / 3), ("#ef4135", 1 / 3)])
    elif flag is Flag.EN:
        _flag_en(pdf, x, y, w, h)
    elif flag is Flag.ES:
        _horizontal(pdf, x, y, w, h, [("#aa151b", 0.25), ("#f1bf00", 0.5), ("#aa151b", 0.25)])
    elif flag is Flag.DE:
        _horizontal(pdf, x, y, w, h, [("#000000", 1 / 3), ("#dd0000", 1 / 3), ("#ffce00", 1 / 3)])
    elif flag is Flag.IT:
        _vertical(pdf, x, y, w, h, [("#009246", 1 / 3), (WHITE, 1 / 3), ("#ce2b37", 1 / 3)])
    elif flag is Flag.PT:
        _flag_pt(pdf, x, y, w, h)
    elif flag is Flag.AR:
        _flag_ar(pdf, x, y, w, h)
    elif flag is Flag.ZH:
        _flag_zh(pdf, x, y, w, h)
    else:
        _flag_generic(pdf, x, y, w, h)
    stroke(pdf, HAIR, 0.4)
    pdf.rect(x, y, w, h, style="D")
