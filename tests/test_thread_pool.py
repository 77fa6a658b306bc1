import threading

from highload.thread_pool import ThreadPool


def test_all_tasks_run_before_shutdown_returns():
    results = []
    pool = ThreadPool(4)
    for i in range(100):
        pool.enqueue(lambda i=i: results.append(i))
    pool.shutdown()
    assert sorted(results) == list(range(100))


def test_single_thread_preserves_order():
    results = []
    with ThreadPool(1) as pool:
        for i in range(20):
            pool.enqueue(lambda i=i: results.append(i))
    assert results == list(range(20))


def test_zero_threads_still_runs_tasks():
    results = []
    with ThreadPool(0) as pool:
        pool.enqueue(lambda: results.append("done"))
    assert results == ["done"]


def test_enqueue_after_shutdown_is_ignored():
    results = []
    pool = ThreadPool(2)
    pool.shutdown()
    pool.enqueue(lambda: results.append(1))
    assert results == []


def test_failing_task_does_not_stop_worker():
    results = []

    def boom():
        raise RuntimeError("boom")

    with ThreadPool(1) as pool:
        pool.enqueue(boom)
        pool.enqueue(lambda: results.append("after"))
    assert results == ["after"]


def test_default_size_runs_tasks():
    event = threading.Event()
    with ThreadPool() as pool:
        pool.enqueue(event.set)
    assert event.is_set()