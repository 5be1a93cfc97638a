"""Sequential executor for one marketplace's ordered strategy steps.

Steps run in registration order and each result is folded into the
accumulated record with :func:`merge_if_absent`, so earlier steps win every
field they supply.  Once a venue name is known the remaining *network*
steps are skipped; the terminal slug step still runs to fill gaps.

Every network step runs under ``asyncio.wait_for`` with the per-step
timeout, further capped by what is left of the request budget.  A timeout
cancels the step's in-flight call.  Timeouts and
:class:`~eventdraft.utils.errors.EventDraftError` are logged and treated as
"no data"; nothing is retried.
"""

from __future__ import annotations

import asyncio

from eventdraft.interfaces.extraction_step import ExtractionContext, IExtractionStep
from eventdraft.models.partial import PartialEvent, merge_if_absent
from eventdraft.utils.errors import ConfigurationError, EventDraftError
from eventdraft.utils.logging import get_logger

logger = get_logger(__name__)


class StrategyChain:
    """Ordered steps for one marketplace.

    Parameters
    ----------
    marketplace:
        Registry key, used in logs.
    steps:
        Steps in priority order.  The last one must not require the network.
    step_timeout:
        Upper bound in seconds for a single network step.
    request_budget:
        Upper bound in seconds for all network steps of one run.
    """

    def __init__(
        self,
        marketplace: str,
        steps: list[IExtractionStep],
        step_timeout: float = 10.0,
        request_budget: float = 25.0,
    ) -> None:
        if not steps or steps[-1].requires_network:
            raise ConfigurationError(
                f"Strategy chain for {marketplace!r} must end with an offline step"
            )
        self._marketplace = marketplace
        self._steps = list(steps)
        self._step_timeout = step_timeout
        self._request_budget = request_budget

    @property
    def marketplace(self) -> str:
        return self._marketplace

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps]

    async def run(self, context: ExtractionContext) -> PartialEvent:
        """Run the chain and return the merged record (never empty)."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._request_budget
        merged = PartialEvent()

        for step in self._steps:
            timeout: float | None = None
            if step.requires_network:
                if merged.has_venue_name:
                    logger.info("chain_short_circuit", step=step.name, venue=merged.venue_name)
                    continue
                if not step.is_available():
                    logger.debug("step_unavailable", step=step.name)
                    continue
                remaining = deadline - loop.time()
                if remaining <= 0:
                    logger.warning("request_budget_exhausted", step=step.name)
                    continue
                timeout = min(self._step_timeout, remaining)

            result = await self._run_step(step, context, timeout)
            merged = merge_if_absent(merged, result, step.name)

        logger.debug(
            "chain_complete",
            marketplace=self._marketplace,
            provenance=merged.provenance,
        )
        return merged

    async def _run_step(
        self,
        step: IExtractionStep,
        context: ExtractionContext,
        timeout: float | None,
    ) -> PartialEvent | None:
        try:
            if timeout is None:
                result = await step.attempt(context)
            else:
                result = await asyncio.wait_for(step.attempt(context), timeout=timeout)
        except TimeoutError:
            logger.warning("step_timeout", step=step.name, timeout=round(timeout or 0, 2))
            return None
        except EventDraftError as exc:
            logger.warning("step_failed", step=step.name, error=str(exc))
            return None

        if result is None or result.is_empty():
            logger.debug("step_no_data", step=step.name)
            return None
        logger.info("step_succeeded", step=step.name, fields=result.filled_fields())
        return result
