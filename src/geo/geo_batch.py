"""
Batched dispatch of bulk geofence mutations.

The provider accepts at most PROVIDER_BATCH_LIMIT items per bulk call.
BatchExecutor splits a request of any size into consecutive batches,
sends all of them at once and folds each batch's per-item outcome into
a single BatchResult. A batch whose whole request fails is recorded as
per-item API_CONNECTION_ERROR entries; sibling batches are unaffected.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Sequence, Type, TypeVar

from ..config.logger_module import log_error, log_info
from .geo_errors import API_CONNECTION_ERROR, EmptyInput, TransportError
from .geo_models import BatchResult, GeofenceError, GeofenceErrorDetail


PROVIDER_BATCH_LIMIT = 10

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT", bound=BatchResult)

SendBatch = Callable[[List[ItemT]], Any]
FoldResponse = Callable[[List[ItemT], Any], BatchResult]


def partition(items: Sequence[ItemT], size: int) -> List[List[ItemT]]:
    """Split items into consecutive chunks of at most ``size``, keeping order."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [list(items[start:start + size]) for start in range(0, len(items), size)]


class BatchExecutor:
    """
    Runs one provider call per batch concurrently and merges the results.

    There is no retry, throttling or cancellation: every batch call runs to
    completion or failure and the operation returns once all have settled.
    Partial results are merged in batch order after the join, so the
    aggregate is deterministic regardless of completion order.
    """

    def __init__(self, batch_size: int = PROVIDER_BATCH_LIMIT):
        if batch_size < 1:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def execute(self,
                items: Sequence[ItemT],
                send_batch: SendBatch,
                fold_response: FoldResponse,
                item_id: Callable[[ItemT], str],
                result_type: Type[ResultT] = BatchResult) -> ResultT:
        """
        Dispatch ``items`` in batches and aggregate the outcome.

        Args:
            items: Items to submit, in order
            send_batch: Sends one batch, returns the provider response or
                raises TransportError
            fold_response: Turns one batch and its response into a partial result
            item_id: Geofence id of an item, used for whole-batch failures
            result_type: BatchResult class to build

        Returns:
            Aggregate result holding every item in successes or errors

        Raises:
            EmptyInput: If items is empty
        """
        if not items:
            raise EmptyInput("Batch input is empty")

        batches = partition(items, self.batch_size)

        with ThreadPoolExecutor(max_workers=len(batches),
                                thread_name_prefix="geo-batch") as executor:
            futures = [
                executor.submit(self._run_batch, index, batch, send_batch, fold_response, item_id)
                for index, batch in enumerate(batches)
            ]
            partials = [future.result() for future in futures]

        results = result_type()
        for partial in partials:
            results.extend(partial)

        log_info(
            f"Batch complete: {len(items)} items in {len(batches)} batches, "
            f"{len(results.successes)} succeeded, {len(results.errors)} failed"
        )
        return results

    @staticmethod
    def _run_batch(index: int,
                   batch: List[ItemT],
                   send_batch: SendBatch,
                   fold_response: FoldResponse,
                   item_id: Callable[[ItemT], str]) -> BatchResult:
        try:
            response = send_batch(batch)
        except TransportError as e:
            log_error(f"Batch {index} of {len(batch)} items failed: {e.message}")
            return BatchResult(errors=[
                GeofenceError(
                    geofence_id=item_id(item),
                    error=GeofenceErrorDetail(code=API_CONNECTION_ERROR, message=e.message),
                )
                for item in batch
            ])

        return fold_response(batch, response)
