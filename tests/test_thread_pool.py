import threading

import pytest

from lumenscene.thread_pool import ThreadPool, get_pool


def test_submit_returns_result():
    with ThreadPool(2) as pool:
        future = pool.submit(lambda a, b: a * b, 6, 7)
        assert future.result(timeout=5) == 6 * 7


def test_keyword_arguments_are_passed():
    with ThreadPool(1) as pool:
        future = pool.submit(dict, x=1, y=2)
        assert future.result(timeout=5) == {"x": 1, "y": 2}


def test_many_tasks_all_run():
    with ThreadPool(4) as pool:
        futures = [pool.submit(lambda n=n: n * n) for n in range(100)]
        assert [f.result(timeout=5) for f in futures] == [n * n for n in range(100)]


def test_exception_is_delivered_through_future():
    def fail():
        raise KeyError("missing")

    with ThreadPool(1) as pool:
        future = pool.submit(fail)
        with pytest.raises(KeyError):
            future.result(timeout=5)


def test_wait_tasks_finish_waits_for_all():
    results = []
    lock = threading.Lock()

    def work(n):
        with lock:
            results.append(n)
        return n

    pool = ThreadPool(3)
    try:
        futures = [pool.submit(work, n) for n in range(50)]
        pool.wait_tasks_finish()
        assert all(f.done() for f in futures)
        assert [f.result(timeout=0) for f in futures] == list(range(50))
        assert sorted(results) == list(range(50))
    finally:
        pool.shutdown()


def test_tasks_run_concurrently():
    barrier = threading.Barrier(2, timeout=5)
    with ThreadPool(2) as pool:
        futures = [pool.submit(barrier.wait) for _ in range(2)]
        assert sorted(f.result(timeout=5) for f in futures) == [0, 1]


def test_submit_after_shutdown_raises():
    pool = ThreadPool(1)
    pool.shutdown()
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)


def test_thread_count_and_invalid_size():
    with ThreadPool(3) as pool:
        assert pool.thread_count == 3
    with pytest.raises(ValueError):
        ThreadPool(0)


def test_get_pool_is_shared_and_works():
    pool = get_pool()
    assert pool is get_pool()
    assert pool.submit(sum, [1, 2, 3]).result(timeout=5) == sum([1, 2, 3])