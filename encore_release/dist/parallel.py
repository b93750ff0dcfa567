"""Run independent build steps concurrently."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

BuildStep = Callable[[], None]
"""A zero-argument operation that either returns or raises."""


def run_parallel(*steps: BuildStep) -> Optional[BaseException]:
    """Run ``steps`` concurrently and return the first error, if any.

    Every step gets its own worker thread and all of them start immediately. This call
    blocks until every step has finished; a failing step never cancels the others. When
    several steps fail, only the error recorded first is returned and the rest are
    discarded. Any ``BaseException`` a step raises, ``SystemExit`` included, counts as
    a failure.

    Parameters
    ----------
    steps : BuildStep
        The steps to run.

    Returns
    -------
    Optional[BaseException]
        None if every step succeeded (or no steps were given), otherwise the first
        recorded error.
    """
    if not steps:
        return None

    first_err: Optional[BaseException] = None
    lock = threading.Lock()

    def _run(step: BuildStep) -> None:
        nonlocal first_err
        try:
            step()
        except BaseException as e:
            with lock:
                if first_err is None:
                    first_err = e

    with ThreadPoolExecutor(max_workers=len(steps), thread_name_prefix="build-step") as pool:
        for step in steps:
            pool.submit(_run, step)

    with lock:
        return first_err
