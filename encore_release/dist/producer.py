"""One-shot handoff from a background producer to the builds that depend on it."""

from __future__ import annotations

from concurrent.futures import Future, InvalidStateError
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ProducerResult:
    """Outcome of a background producer, delivered together with its completion."""

    ok: bool
    output_dir: Path
    error: Optional[BaseException] = None


class ProducerHandle:
    """A single-producer, many-reader completion signal carrying a :class:`ProducerResult`.

    The producer calls :meth:`complete` or :meth:`fail` exactly once. Consumers call
    :meth:`wait`, which blocks until then and returns the result. Since the outcome
    travels with the signal there is no way to observe the outcome before completion.

    Parameters
    ----------
    output_dir : Path
        The directory the producer writes its files into. Valid to read only after a
        successful completion.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)
        self._future: Future[ProducerResult] = Future()

    def complete(self) -> None:
        """Signal successful completion.

        Raises
        ------
        RuntimeError
            If the handle was already signaled.
        """
        self._set(ProducerResult(ok=True, output_dir=self.output_dir))

    def fail(self, error: Optional[BaseException] = None) -> None:
        """Signal failed completion, optionally with the underlying cause.

        Raises
        ------
        RuntimeError
            If the handle was already signaled.
        """
        self._set(ProducerResult(ok=False, output_dir=self.output_dir, error=error))

    def _set(self, result: ProducerResult) -> None:
        try:
            self._future.set_result(result)
        except InvalidStateError as e:
            raise RuntimeError("producer handle already signaled") from e

    def done(self) -> bool:
        return self._future.done()

    def wait(self) -> ProducerResult:
        """Block until the producer has signaled and return its result. Never times out."""
        return self._future.result()

    @classmethod
    def completed(cls, output_dir: Path) -> "ProducerHandle":
        """Return a handle that is already signaled as successful."""
        handle = cls(output_dir)
        handle.complete()
        return handle

    @classmethod
    def failed(cls, output_dir: Path, error: Optional[BaseException] = None) -> "ProducerHandle":
        """Return a handle that is already signaled as failed."""
        handle = cls(output_dir)
        handle.fail(error)
        return handle
