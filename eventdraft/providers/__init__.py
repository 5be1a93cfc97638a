"""Concrete adapters for the interfaces in :mod:`eventdraft.interfaces`."""
