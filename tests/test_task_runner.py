import threading

from ui.common.task_runner import QtTaskRunner


def test_result_is_delivered_in_gui_thread(qtbot):
    runner = QtTaskRunner()
    results = []
    worker_threads = []

    def job():
        worker_threads.append(threading.get_ident())
        return 42

    runner.submit(
        job,
        lambda value: results.append((value, threading.get_ident())),
        lambda exc: results.append(("error", exc)),
    )
    qtbot.waitUntil(lambda: len(results) == 1 and runner.pending_count == 0, timeout=5000)

    assert results == [(42, threading.get_ident())]
    assert worker_threads and worker_threads[0] != threading.get_ident()


def test_exception_goes_to_error_callback(qtbot):
    runner = QtTaskRunner()
    results = []

    def job():
        raise ConnectionError("offline")

    runner.submit(job, results.append, lambda exc: results.append(exc))
    qtbot.waitUntil(lambda: len(results) == 1, timeout=5000)

    assert isinstance(results[0], ConnectionError)
    qtbot.waitUntil(lambda: runner.pending_count == 0, timeout=5000)


def test_wait_all_blocks_until_workers_finish(qtbot):
    runner = QtTaskRunner()
    release = threading.Event()
    results = []

    runner.submit(lambda: release.wait(5) and "done", results.append, results.append)
    assert runner.pending_count == 1
    release.set()
    runner.wait_all()

    qtbot.waitUntil(lambda: results == ["done"], timeout=5000)
