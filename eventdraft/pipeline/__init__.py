"""Extraction pipeline: source dispatch, strategy steps and chain execution.

- :mod:`eventdraft.pipeline.dispatcher` -- hostname registry.
- :mod:`eventdraft.pipeline.marketplaces` -- per-marketplace chain wiring.
- :mod:`eventdraft.pipeline.steps` -- lookup/search/embed/html/slug steps.
- :mod:`eventdraft.pipeline.strategy_chain` -- ordered, time-bounded executor.
"""
