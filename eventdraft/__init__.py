"""eventdraft: marketplace URL -> always-complete event draft."""

__version__ = "0.1.0"
