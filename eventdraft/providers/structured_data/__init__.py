from eventdraft.providers.structured_data.markup_parser import MarkupParser

__all__ = ["MarkupParser"]
