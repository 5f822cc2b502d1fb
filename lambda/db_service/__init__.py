from .dynamo import get_entries, add_entry, clear_entries

__all__ = ['get_entries', 'add_entry', 'clear_entries']
