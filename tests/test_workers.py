"""Testes da thread de chamadas em segundo plano (sem loop de eventos)."""

import threading

from ui.workers import _RUNNING, CallWorker


def _collect(worker):
    results, errors = [], []
    worker.succeeded.connect(results.append)
    worker.failed.connect(errors.append)
    return results, errors


class TestCallWorker:

    def test_run_emits_result(self):
        worker = CallWorker(lambda a, b: a + b, 1, 2)
        results, errors = _collect(worker)
        worker.run()
        assert results == [3]
        assert errors == []

    def test_run_emits_exception(self):
        def boom():
            raise RuntimeError('falhou')

        worker = CallWorker(boom)
        results, errors = _collect(worker)
        worker.run()
        assert results == []
        assert isinstance(errors[0], RuntimeError)

    def test_detached_worker_delivers_nothing(self):
        worker = CallWorker(lambda: 'ok')
        results, errors = _collect(worker)
        worker.detach()
        worker.run()
        assert results == [] and errors == []

    def test_detach_without_connections(self):
        worker = CallWorker(lambda: None)
        worker.detach()
        worker.detach()

    def test_running_thread_is_kept_alive(self):
        release = threading.Event()
        worker = CallWorker(release.wait, 5)
        worker.start()
        try:
            assert worker in _RUNNING
        finally:
            release.set()
            assert worker.wait(5000)
        worker._release()
        assert worker not in _RUNNING
