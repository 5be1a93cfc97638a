from eventdraft.providers.page.http_page_provider import HttpPageProvider

__all__ = ["HttpPageProvider"]
