"""Concurrent fan-out for template batches with per-item failure isolation."""

import asyncio
import time
from typing import Awaitable, Callable, List, Sequence

from studio.handlers.error_handler import error_message
from studio.models.generate import BatchItem, BatchResult
from studio.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)

PromptFn = Callable[[BatchItem], str]
GenerateFn = Callable[[str], Awaitable[List[str]]]


class BatchOrchestrator:
    """Run one generation per batch item, all at once.

    Every item is launched immediately (no concurrency cap) and settles on
    its own: a failing item becomes a result carrying `error` and no images,
    and never cancels its siblings. Results come back in submission order.
    """

    async def _run_item(
        self, index: int, item: BatchItem, resolve_prompt: PromptFn, generate: GenerateFn
    ) -> BatchResult:
        processed_prompt = ""
        try:
            processed_prompt = resolve_prompt(item)
            image_urls = await generate(processed_prompt)
            return BatchResult(
                reference_image_id=item.reference_image_id,
                variables=item.variables,
                processed_prompt=processed_prompt,
                image_urls=image_urls,
            )
        except Exception as e:
            logger.error(
                f"Batch item {index} ({item.reference_image_id}) failed: {e}"
            )
            return BatchResult(
                reference_image_id=item.reference_image_id,
                variables=item.variables,
                processed_prompt=processed_prompt,
                image_urls=[],
                error=error_message(e) or "Failed to generate image",
            )

    async def run(
        self,
        items: Sequence[BatchItem],
        resolve_prompt: PromptFn,
        generate: GenerateFn,
    ) -> List[BatchResult]:
        """Process all items concurrently and join every outcome."""
        start = time.time()
        tasks = [
            self._run_item(index, item, resolve_prompt, generate)
            for index, item in enumerate(items)
        ]
        results = await asyncio.gather(*tasks)

        failed = sum(1 for r in results if r.error)
        logger.info(
            f"Batch of {len(results)} settled in {time.time() - start:.3f}s "
            f"({failed} failed)"
        )
        return list(results)
