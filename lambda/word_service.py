from datetime import date

import db_service
import extraction_service
import render_service
from models import *
from utils import logging

GEOMETRY = CanvasGeometry()


def find_word(completion, query: str = None) -> WordResult:
    logging.info(f"Finding word for query {query!r}")
    result = extraction_service.find_word(completion, query)
    logging.info(f"Found word {result.word} ({result.origin})")
    return result


def build_card(result: WordResult, variant: CardVariantEnum, today: date = None) -> bytes:
    logging.info(f"Rendering {variant.value} card for word {result.word}")
    surface = render_service.CardSurface(GEOMETRY)
    ops = render_service.render(result, GEOMETRY, surface.measure, variant, today)
    return surface.paint(ops).to_png()


def archive_word(user_id: str, result: WordResult) -> ArchiveList:
    return ArchiveList(words=db_service.add_entry(user_id, result))


def get_archive(user_id: str) -> ArchiveList:
    return ArchiveList(words=db_service.get_entries(user_id))


def clear_archive(user_id: str):
    return db_service.clear_entries(user_id)
