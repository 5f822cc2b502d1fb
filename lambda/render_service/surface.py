import io
import os
import re

from PIL import Image, ImageDraw, ImageFont

from models import CanvasGeometry, FontSpec, FontFamilyEnum, DrawOp, FillRect, StrokeRect, Line, FillText
from utils import logging

CARD_FONT_DIR = os.getenv("CARD_FONT_DIR")

# Candidate font files per (family, bold, italic), macOS first then Linux
FONT_CANDIDATES = {
    (FontFamilyEnum.SERIF, False, False): ["Georgia.ttf", "/System/Library/Fonts/Supplemental/Georgia.ttf",
                                           "/usr/share/fonts/truetype/dejavu/DejaVuSerif.ttf"],
    (FontFamilyEnum.SERIF, True, False): ["Georgia Bold.ttf", "/System/Library/Fonts/Supplemental/Georgia Bold.ttf",
                                          "/usr/share/fonts/truetype/dejavu/DejaVuSerif-Bold.ttf"],
    (FontFamilyEnum.SERIF, False, True): ["Georgia Italic.ttf", "/System/Library/Fonts/Supplemental/Georgia Italic.ttf",
                                          "/usr/share/fonts/truetype/dejavu/DejaVuSerif-Italic.ttf"],
    (FontFamilyEnum.SANS, False, False): ["Arial.ttf", "/System/Library/Fonts/Supplemental/Arial.ttf",
                                          "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"],
    (FontFamilyEnum.SANS, False, True): ["Arial Italic.ttf", "/System/Library/Fonts/Supplemental/Arial Italic.ttf",
                                         "/usr/share/fonts/truetype/dejavu/DejaVuSans-Oblique.ttf"],
}


def card_filename(word: str) -> str:
    sanitized = re.sub(r"[^a-zA-Z0-9]", "-", word).lower()
    return f"a-word-for-this-{sanitized}.png"


class CardSurface:
    """Pillow-backed drawing surface for share cards."""

    def __init__(self, geometry: CanvasGeometry):
        self.geometry = geometry
        self.image = Image.new("RGB", (geometry.width, geometry.height), geometry.background)
        self.draw = ImageDraw.Draw(self.image)
        self._fonts = {}

    def _load_font(self, font_spec: FontSpec):
        if font_spec in self._fonts:
            return self._fonts[font_spec]

        candidates = FONT_CANDIDATES.get((font_spec.family, font_spec.bold, font_spec.italic)) \
            or FONT_CANDIDATES[(font_spec.family, False, False)]
        for name in candidates:
            paths = [os.path.join(CARD_FONT_DIR, name)] if CARD_FONT_DIR and not os.path.isabs(name) else []
            paths.append(name)
            for path in paths:
                try:
                    font = ImageFont.truetype(path, font_spec.size)
                    self._fonts[font_spec] = font
                    return font
                except OSError:
                    continue

        logging.warning(f"No font file found for {font_spec.family.value} bold={font_spec.bold} italic={font_spec.italic}, using default font")
        font = ImageFont.load_default(size=font_spec.size)
        self._fonts[font_spec] = font
        return font

    def measure(self, text: str, font: FontSpec) -> float:
        return self._load_font(font).getlength(text)

    def paint(self, ops: list[DrawOp]):
        for op in ops:
            if isinstance(op, FillRect):
                self.draw.rectangle([op.x, op.y, op.x + op.width, op.y + op.height], fill=op.color)
            elif isinstance(op, StrokeRect):
                self.draw.rectangle([op.x, op.y, op.x + op.width, op.y + op.height], outline=op.color, width=op.line_width)
            elif isinstance(op, Line):
                self.draw.line([(op.x1, op.y1), (op.x2, op.y2)], fill=op.color, width=op.line_width)
            elif isinstance(op, FillText):
                self._fill_text(op)
            else:
                raise TypeError(f"Unsupported draw instruction: {op!r}")
        return self

    def _fill_text(self, op: FillText):
        font = self._load_font(op.font)
        if isinstance(font, ImageFont.FreeTypeFont):
            # "ms": x is the horizontal middle, y the baseline
            self.draw.text((op.x, op.y), op.text, font=font, fill=op.color, anchor="ms")
        else:
            # Bitmap fonts only support the top-left anchor
            x = op.x - font.getlength(op.text) / 2
            self.draw.text((x, op.y - op.font.size), op.text, font=font, fill=op.color)

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()
