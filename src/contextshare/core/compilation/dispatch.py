from __future__ import annotations

"""
Compile Worker Dispatch.

Runs the compilation engine off the interactive thread. Each job gets a
fresh single-worker executor that is shut down once the reply arrives, and
at most one job may be in flight per dispatcher (capacity 1, no queue).

The executor is produced by a factory, so a thread, a child process or a
shared pool can be plugged in without touching ``compile_files``.
Execution-level failures (the worker cannot start, crashes or the boundary
raises) come back as a single failed CompilationResult with no partial text.
"""

import logging
import threading
from concurrent.futures import BrokenExecutor, Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from contextshare.core.compilation.engine import DEFAULT_MAX_READ_WORKERS, compile_files
from contextshare.domain import constants as const
from contextshare.domain.compilation_models import CompilationResult, create_error_result

logger = logging.getLogger(__name__)

ExecutorFactory = Callable[[], Executor]


# -----------------------------------------------------------------------------
# WORKER FACTORIES
# -----------------------------------------------------------------------------

def thread_worker_factory() -> Executor:
    return ThreadPoolExecutor(max_workers=1, thread_name_prefix="CompileWorker")


def process_worker_factory() -> Executor:
    return ProcessPoolExecutor(max_workers=1)


def executor_factory_for(worker_mode: str) -> ExecutorFactory:
    """Map a configured worker mode to its executor factory."""
    if worker_mode == const.WORKER_MODE_PROCESS:
        return process_worker_factory
    return thread_worker_factory


# -----------------------------------------------------------------------------
# REQUEST MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompileRequest:
    """
    Immutable copy of everything the worker needs.

    Attributes:
        paths: Selected file paths.
        root: Root folder the header paths are relative to.
        max_workers: Read fan-out width inside the worker.
        encoding: File text encoding.
        errors: Codec error policy.
    """
    paths: Tuple[str, ...]
    root: str
    max_workers: int = DEFAULT_MAX_READ_WORKERS
    encoding: str = "utf-8"
    errors: str = "strict"

    @classmethod
    def build(cls, paths: Sequence[str], root: Optional[str], **options: object) -> "CompileRequest":
        return cls(paths=tuple(paths), root=root or "", **options)  # type: ignore[arg-type]


def validate_request(request: CompileRequest) -> None:
    """
    Reject requests the engine must never see.

    Raises:
        ValueError: If no file is selected or no root folder is set.
    """
    if not request.root:
        raise ValueError("No root folder selected.")
    if not request.paths:
        raise ValueError("No files selected.")


# -----------------------------------------------------------------------------
# DISPATCHER
# -----------------------------------------------------------------------------

class CompileDispatcher:
    """
    Capacity-1 gateway to a one-shot compile worker.
    """

    def __init__(self, executor_factory: Optional[ExecutorFactory] = None) -> None:
        self._factory: ExecutorFactory = executor_factory or thread_worker_factory
        self._lock = threading.Lock()
        self._in_flight = False

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._in_flight

    def run(self, request: CompileRequest) -> CompilationResult:
        """
        Execute a job and block until its single reply arrives.

        Raises:
            ValueError: If the request fails validation.
            RuntimeError: If another job is still in flight.
        """
        validate_request(request)
        self._admit()
        try:
            return self._execute(request)
        finally:
            self._release()

    def submit(
            self,
            request: CompileRequest,
            on_complete: Callable[[CompilationResult], None],
            on_admitted: Optional[Callable[[], None]] = None,
    ) -> threading.Thread:
        """
        Execute a job on a background thread and hand the result to
        ``on_complete`` from that thread.

        Validation and admission happen on the caller's thread, so a rejected
        request never spawns anything. ``on_admitted`` runs on the caller's
        thread once the job holds the slot and before the worker starts.

        Raises:
            ValueError: If the request fails validation.
            RuntimeError: If another job is still in flight.
        """
        validate_request(request)
        self._admit()
        if on_admitted is not None:
            try:
                on_admitted()
            except BaseException:
                self._release()
                raise

        def _task() -> None:
            try:
                result = self._execute(request)
            finally:
                self._release()
            on_complete(result)

        thread = threading.Thread(target=_task, name="CompileDispatch", daemon=True)
        try:
            thread.start()
        except RuntimeError:
            self._release()
            raise
        return thread

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _admit(self) -> None:
        with self._lock:
            if self._in_flight:
                raise RuntimeError("A compile job is already running.")
            self._in_flight = True

    def _release(self) -> None:
        with self._lock:
            self._in_flight = False

    def _execute(self, request: CompileRequest) -> CompilationResult:
        file_count = len(request.paths)
        logger.info(f"Dispatching compile job: {file_count} file(s) under {request.root}")

        try:
            executor = self._factory()
        except Exception as e:
            logger.error(f"Compile worker failed to start: {e}", exc_info=True)
            return create_error_result(f"Compile worker failed to start: {e}", file_count)

        try:
            future = executor.submit(
                compile_files,
                list(request.paths),
                request.root,
                max_workers=request.max_workers,
                encoding=request.encoding,
                errors=request.errors,
            )
            result = future.result()
        except BrokenExecutor as e:
            logger.error(f"Compile worker crashed: {e}", exc_info=True)
            return create_error_result(f"Compile worker crashed: {e}", file_count)
        except Exception as e:
            logger.error(f"Compilation failed: {e}", exc_info=True)
            return create_error_result(f"Compilation failed: {e}", file_count)
        finally:
            executor.shutdown(wait=True)

        if not isinstance(result, CompilationResult):
            return create_error_result(
                "Compilation completed but returned an invalid result.", file_count
            )
        return result


# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def run_compile_job(
        paths: Sequence[str],
        root: Optional[str],
        *,
        worker_mode: str = const.WORKER_MODE_THREAD,
        max_workers: int = DEFAULT_MAX_READ_WORKERS,
        encoding: str = "utf-8",
        errors: str = "strict",
) -> CompilationResult:
    """
    Compile ``paths`` in a one-shot worker and return the single reply.

    Raises:
        ValueError: On an empty selection or missing root (before dispatch).
    """
    request = CompileRequest.build(
        paths, root, max_workers=max_workers, encoding=encoding, errors=errors
    )
    return CompileDispatcher(executor_factory_for(worker_mode)).run(request)
