"""Test utility helpers for running Qt-based workers with deterministic timeouts.

A hard failure is raised if the worker does not finish within the allotted
time, making the failure visible instead of silently quitting the loop with
no result.
"""

from __future__ import annotations

from typing import Any, Tuple, Type

from PyQt6.QtCore import QCoreApplication, QTimer


def run_qt_worker(
    worker_cls: Type[Any], *args, timeout_ms: int = 5000, **kwargs
) -> Tuple[Any, str]:
    """Run a QThread worker class until finished or timeout.

    Parameters:
        worker_cls: Class implementing .start() and a .finished(result, error) signal
        timeout_ms: Maximum time to allow the event loop to run.
    Returns:
        (result, error) tuple as emitted by the worker.
    Raises:
        TimeoutError if the worker fails to finish in time.
    """
    app = QCoreApplication.instance() or QCoreApplication([])  # type: ignore
    result_container = {"done": False, "result": None, "error": ""}
    worker = worker_cls(*args, **kwargs)

    def _finished(result, error):  # type: ignore
        result_container["result"] = result
        result_container["error"] = error
        result_container["done"] = True
        app.quit()

    worker.finished.connect(_finished)  # type: ignore
    worker.start()
    # Hard timeout; stopped afterwards so it cannot quit a later test's loop
    timer = QTimer()
    timer.setSingleShot(True)
    timer.timeout.connect(app.quit)  # type: ignore
    timer.start(timeout_ms)
    app.exec()  # type: ignore
    timer.stop()
    worker.wait(timeout_ms)
    if not result_container["done"]:
        raise TimeoutError(
            f"Worker {worker_cls.__name__} did not finish within {timeout_ms}ms during test"
        )
    return result_container["result"], result_container["error"]
