from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Literal, Optional, Union
from enum import Enum
from datetime import datetime, timezone

class WordResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    pronunciation: str = ""
    origin: str = "Unknown origin"
    definition: str
    timestamp: datetime
    query: Optional[str] = None  # Attached by the caller, never by the extractor

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Naive timestamps are treated as UTC so archives stay sortable
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v

class CompletionRequest(BaseModel):
    completion: Any  # Relay reply: chat completion dict, generated_text list or plain string
    query: Optional[str] = Field(default=None, max_length=200)  # Same cap as the input form

class ArchiveList(BaseModel):
    words: list[WordResult]

class ParseTierEnum(str, Enum):
    STRUCTURED = "STRUCTURED"
    RECOVERED = "RECOVERED"

class FieldSourceEnum(str, Enum):
    STRUCTURED = "STRUCTURED"
    PATTERN = "PATTERN"
    DEFAULT = "DEFAULT"

class ParseAttempt(BaseModel):
    tier: ParseTierEnum
    fields: dict[str, str]
    provenance: dict[str, FieldSourceEnum]

class CardVariantEnum(str, Enum):
    ARCHIVE = "ARCHIVE"  # Footer shows the current date
    SHARE = "SHARE"  # Footer shows the attribution line

class FontFamilyEnum(str, Enum):
    SERIF = "SERIF"
    SANS = "SANS"

class FontSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: FontFamilyEnum = FontFamilyEnum.SERIF
    size: int
    bold: bool = False
    italic: bool = False

class CanvasGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = 800
    height: int = 600
    padding: int = 60
    background: str = "#F5F5F0"
    text_color: str = "#000000"
    muted_color: str = "#4A4A4A"

class FillRect(BaseModel):
    kind: Literal["FILL_RECT"] = "FILL_RECT"
    x: float
    y: float
    width: float
    height: float
    color: str

class StrokeRect(BaseModel):
    kind: Literal["STROKE_RECT"] = "STROKE_RECT"
    x: float
    y: float
    width: float
    height: float
    color: str
    line_width: int = 1

class Line(BaseModel):
    kind: Literal["LINE"] = "LINE"
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    line_width: int = 1

class FillText(BaseModel):
    kind: Literal["FILL_TEXT"] = "FILL_TEXT"
    text: str
    x: float  # Horizontal centre
    y: float  # Baseline
    font: FontSpec
    color: str

DrawOp = Union[FillRect, StrokeRect, Line, FillText]
