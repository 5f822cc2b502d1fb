from .layout import wrap_text, render, render_archive_card, render_share_card
from .surface import CardSurface, card_filename

__all__ = ['wrap_text', 'render', 'render_archive_card', 'render_share_card', 'CardSurface', 'card_filename']
