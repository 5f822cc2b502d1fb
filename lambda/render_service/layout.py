"""Share-card layout planning.

The planner never touches pixels: it turns a ``WordResult`` into an ordered
list of draw instructions that a surface (see ``surface.py``) executes. Text
measurement is injected so the same plan can be produced for any surface.
"""

from datetime import date
from typing import Callable

from models import (
    WordResult, CanvasGeometry, CardVariantEnum, FontSpec, FontFamilyEnum,
    DrawOp, FillRect, StrokeRect, Line, FillText,
)

TITLE = "A Word for This"
ATTRIBUTION = "Powered by A Word For This"

TITLE_FONT = FontSpec(family=FontFamilyEnum.SERIF, size=24)
WORD_FONT = FontSpec(family=FontFamilyEnum.SERIF, size=64, bold=True)
PRONUNCIATION_FONT = FontSpec(family=FontFamilyEnum.SANS, size=18, italic=True)
ORIGIN_FONT = FontSpec(family=FontFamilyEnum.SERIF, size=16, italic=True)
DEFINITION_FONT = FontSpec(family=FontFamilyEnum.SERIF, size=16)
FOOTER_FONT = FontSpec(family=FontFamilyEnum.SANS, size=12)

LINE_HEIGHT = 24

MeasureFn = Callable[[str], float]
FontMeasureFn = Callable[[str, FontSpec], float]


def wrap_text(text: str, max_width: float, measure: MeasureFn) -> list[str]:
    """
    Greedy word-wrap.

    Breaks only between whitespace-separated tokens. A token wider than
    ``max_width`` on its own is kept whole on its own line.
    """
    lines = []
    current = ""

    for token in text.split():
        candidate = f"{current} {token}" if current else token
        if measure(candidate) > max_width and current:
            lines.append(current)
            current = token
        else:
            current = candidate

    if current:
        lines.append(current)

    return lines


def format_footer_date(day: date) -> str:
    # e.g. "October 16, 2026"
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def render(
    result: WordResult,
    geometry: CanvasGeometry,
    measure: FontMeasureFn,
    variant: CardVariantEnum = CardVariantEnum.ARCHIVE,
    today: date = None,
) -> list[DrawOp]:
    w, h, p = geometry.width, geometry.height, geometry.padding
    ink = geometry.text_color
    muted = geometry.muted_color
    cx = w / 2

    ops: list[DrawOp] = [
        FillRect(x=0, y=0, width=w, height=h, color=geometry.background),
        # Double border
        StrokeRect(x=p / 2, y=p / 2, width=w - p, height=h - p, color=ink, line_width=2),
        StrokeRect(x=p / 2 + 4, y=p / 2 + 4, width=w - p - 8, height=h - p - 8, color=ink, line_width=1),
        FillText(text=TITLE, x=cx, y=p + 30, font=TITLE_FONT, color=ink),
        Line(x1=p + 100, y1=p + 45, x2=w - p - 100, y2=p + 45, color=ink, line_width=1),
        FillText(text=result.word, x=cx, y=h / 2 - 40, font=WORD_FONT, color=ink),
    ]

    if result.pronunciation:
        ops.append(FillText(text=f"/{result.pronunciation}/", x=cx, y=h / 2, font=PRONUNCIATION_FONT, color=muted))

    ops.append(FillText(text=result.origin, x=cx, y=h / 2 + 35, font=ORIGIN_FONT, color=ink))

    max_width = w - p * 2 - 40
    start_y = h / 2 + 80
    lines = wrap_text(result.definition, max_width, lambda s: measure(s, DEFINITION_FONT))
    for index, line in enumerate(lines):
        ops.append(FillText(text=line, x=cx, y=start_y + index * LINE_HEIGHT, font=DEFINITION_FONT, color=ink))

    if variant == CardVariantEnum.SHARE:
        footer = ATTRIBUTION
    else:
        footer = format_footer_date(today or date.today())
    ops.append(FillText(text=footer, x=cx, y=h - p, font=FOOTER_FONT, color=muted))

    return ops


def render_archive_card(result: WordResult, geometry: CanvasGeometry, measure: FontMeasureFn, today: date = None):
    return render(result, geometry, measure, CardVariantEnum.ARCHIVE, today)


def render_share_card(result: WordResult, geometry: CanvasGeometry, measure: FontMeasureFn):
    return render(result, geometry, measure, CardVariantEnum.SHARE)
