from .extractor import extract, find_word, completion_text, locate_structured_span, parse_attempt, ExtractionError

__all__ = ['extract', 'find_word', 'completion_text', 'locate_structured_span', 'parse_attempt', 'ExtractionError']
