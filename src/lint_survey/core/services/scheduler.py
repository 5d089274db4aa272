from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence, TypeVar

from ..domain.models import BatchOutcome, RepositoryRef, RepositoryResult
from ..ports import CheckpointStorePort, LoggerPort, ResultStorePort
from .repository_processor import RepositoryProcessor

T = TypeVar("T")


def plan_super_batches(items: Sequence[T], *, batch_size: int, num_batches: int) -> list[list[list[T]]]:
    """Partition items into super-batches of up to ``num_batches`` batches.

    Example: 230 items with batch_size=20, num_batches=5 gives three
    super-batches holding 5, 5 and 2 batches.
    """
    if batch_size < 1 or num_batches < 1:
        raise ValueError("batch_size and num_batches must be positive")

    batches = [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]
    return [batches[i:i + num_batches] for i in range(0, len(batches), num_batches)]


@dataclass
class _RunState:
    checkpoint: set[str]
    results: list[RepositoryResult]
    processed: int = 0
    failed: int = 0


class BatchScheduler:
    """Drives repository processing in checkpointed super-batches.

    Within a super-batch each batch runs on its own worker thread and walks
    its repositories in order. The checkpoint set and result list are shared
    between workers and only touched under ``self._lock``. Results and the
    checkpoint are persisted every ``checkpoint_every`` super-batches (and
    after the last one), results first.
    """

    def __init__(
        self,
        *,
        processor: RepositoryProcessor,
        checkpoint_store: CheckpointStorePort,
        result_store: ResultStorePort,
        logger: LoggerPort,
        batch_size: int = 20,
        num_batches: int = 5,
        checkpoint_every: int = 1,
    ) -> None:
        if checkpoint_every < 1:
            raise ValueError("checkpoint_every must be positive")
        self._processor = processor
        self._checkpoints = checkpoint_store
        self._results = result_store
        self._logger = logger
        self._batch_size = batch_size
        self._num_batches = num_batches
        self._checkpoint_every = checkpoint_every
        self._lock = threading.Lock()

    def run(self, repositories: Sequence[RepositoryRef], *, limit: int | None = None) -> BatchOutcome:
        if limit is not None and limit < 1:
            raise ValueError("limit must be positive")

        checkpoint = self._checkpoints.load()
        existing = self._results.load()
        self._logger.info(
            "lint_run_loaded",
            repositories=len(repositories),
            checkpointed=len(checkpoint),
            existing_results=len(existing),
        )

        # One entry per key; two workers must never share a clone directory.
        pending: list[RepositoryRef] = []
        seen: set[str] = set()
        for repo in repositories:
            if repo.key in checkpoint:
                continue
            if repo.key in seen:
                self._logger.warning("duplicate_repository_skipped", repo=repo.full_name, repo_id=repo.id)
                continue
            seen.add(repo.key)
            pending.append(repo)
        if limit is not None:
            pending = pending[:limit]
        self._logger.info("lint_run_pending", pending=len(pending))

        plan = plan_super_batches(pending, batch_size=self._batch_size, num_batches=self._num_batches)
        state = _RunState(checkpoint=checkpoint, results=[])

        for index, super_batch in enumerate(plan, start=1):
            with ThreadPoolExecutor(max_workers=self._num_batches, thread_name_prefix="lint-batch") as pool:
                futures = [pool.submit(self._run_batch, batch, state) for batch in super_batch]
                for future in futures:
                    future.result()

            done = min(index * self._batch_size * self._num_batches, len(pending))
            self._logger.info("super_batch_done", super_batch=index, done=done, pending=len(pending))

            if index % self._checkpoint_every == 0 or index == len(plan):
                self._persist(existing, state)

        return BatchOutcome(
            pending=len(pending),
            processed=state.processed,
            failed=state.failed,
            super_batches=len(plan),
        )

    def _run_batch(self, batch: list[RepositoryRef], state: _RunState) -> None:
        for repo in batch:
            with self._lock:
                if repo.key in state.checkpoint:
                    self._logger.info("repo_already_processed", repo=repo.full_name, repo_id=repo.id)
                    continue

            try:
                result = self._processor.process(repo)
            except Exception:
                self._logger.exception("repo_failed", repo=repo.full_name, repo_id=repo.id)
                with self._lock:
                    state.failed += 1
                continue

            with self._lock:
                state.results.append(result)
                state.checkpoint.add(repo.key)
                state.processed += 1

    def _persist(self, existing: list[RepositoryResult], state: _RunState) -> None:
        with self._lock:
            merged = existing + state.results
            ids = set(state.checkpoint)

        self._results.save(merged)
        self._checkpoints.save(ids)
        self._logger.info("progress_saved", results=len(merged), checkpointed=len(ids))
