import threading
import time

from kubedemo.core.errors import ObserverFailure
from kubedemo.lib.resources import ResourceRef, declare_workload
from kubedemo.runner.observer import WorkloadObserver


def wait_for(predicate, timeout=5.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_poll_once_reads_by_name(handle, workload_spec):
    ref = declare_workload(handle, workload_spec)
    observer = WorkloadObserver(handle, ref)

    assert observer.poll_once().metadata.name == "hello-app1"
    assert observer.reads == 1


def test_observer_polls_until_stopped(handle, cluster, workload_spec):
    ref = declare_workload(handle, workload_spec)
    observer = WorkloadObserver(handle, ref, interval=0.01)

    observer.start()
    assert wait_for(lambda: observer.reads >= 3)
    observer.stop()

    assert observer.join(timeout=2.0)
    assert not observer.is_running
    assert observer.error is None
    assert all(call == ("get", "Deployment", "hello-app1") for call in cluster.ops("get"))


def test_observer_stop_interrupts_sleep(handle, workload_spec):
    ref = declare_workload(handle, workload_spec)
    observer = WorkloadObserver(handle, ref, interval=60)

    observer.start()
    assert wait_for(lambda: observer.reads == 1)
    observer.stop()

    assert observer.join(timeout=2.0)


def test_observer_reports_failed_read(handle):
    failed = threading.Event()
    seen = []

    def on_failure(error):
        seen.append(error)
        failed.set()

    observer = WorkloadObserver(handle, ResourceRef("Deployment", "default", "ghost"),
                                interval=0.01, on_failure=on_failure)
    observer.start()

    assert failed.wait(timeout=2.0)
    assert observer.join(timeout=2.0)
    assert isinstance(seen[0], ObserverFailure)
    assert observer.error is seen[0]
    assert observer.reads == 0


def test_join_without_start_is_immediate(handle):
    observer = WorkloadObserver(handle, ResourceRef("Deployment", "default", "x"))
    assert observer.join(timeout=0)


def test_observer_reports_failed_wait(handle, workload_spec):
    ref = declare_workload(handle, workload_spec)
    seen = []
    # Event.wait() overflows on an infinite timeout.
    observer = WorkloadObserver(handle, ref, interval=float("inf"), on_failure=seen.append)

    observer.start()

    assert observer.join(timeout=2.0)
    assert observer.reads == 1
    assert isinstance(seen[0], ObserverFailure)
    assert observer.error is seen[0]
