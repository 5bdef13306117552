"""Shared fixtures: an in-memory stand-in for the AppsV1 / CoreV1 API groups."""

import copy
import uuid

import pytest
from kubernetes.client.rest import ApiException

from kubedemo.core.config import Settings
from kubedemo.lib.binding import Binding
from kubedemo.lib.specs import RoutingMode, ServiceSpec, WorkloadSpec


class FakeCluster:
    """Stores created objects by (namespace, name) and records every call in order."""

    def __init__(self):
        self.deployments = {}
        self.services = {}
        self.calls = []
        self.failures = {}
        self.reads = 0
        self.on_read = None

    def _record(self, op, kind, namespace, name):
        self.calls.append((op, kind, namespace, name))
        exc = self.failures.get((op, kind))
        if exc is not None:
            raise exc

    def _create(self, store, kind, namespace, body):
        self._record("create", kind, namespace, body.metadata.name)
        key = (namespace, body.metadata.name)
        if key in store:
            raise ApiException(status=409, reason="Conflict")
        stored = copy.deepcopy(body)
        stored.metadata.namespace = namespace
        stored.metadata.uid = str(uuid.uuid4())
        store[key] = stored
        return copy.deepcopy(stored)

    def _read(self, store, kind, namespace, name):
        self._record("get", kind, namespace, name)
        if (namespace, name) not in store:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(store[(namespace, name)])

    def _delete(self, store, kind, namespace, name):
        self._record("delete", kind, namespace, name)
        if store.pop((namespace, name), None) is None:
            raise ApiException(status=404, reason="Not Found")

    def ops(self, *wanted):
        """Call log filtered to the given operations, as (op, kind, name)."""
        return [(op, kind, name) for op, kind, _, name in self.calls if op in wanted]


class FakeAppsApi:
    def __init__(self, cluster):
        self.cluster = cluster

    def create_namespaced_deployment(self, namespace, body):
        return self.cluster._create(self.cluster.deployments, "Deployment", namespace, body)

    def read_namespaced_deployment(self, name, namespace):
        read = self.cluster._read(self.cluster.deployments, "Deployment", namespace, name)
        self.cluster.reads += 1
        if self.cluster.on_read:
            self.cluster.on_read(self.cluster.reads)
        return read

    def delete_namespaced_deployment(self, name, namespace):
        self.cluster._delete(self.cluster.deployments, "Deployment", namespace, name)


class FakeCoreApi:
    def __init__(self, cluster):
        self.cluster = cluster

    def create_namespaced_service(self, namespace, body):
        return self.cluster._create(self.cluster.services, "Service", namespace, body)

    def delete_namespaced_service(self, name, namespace):
        self.cluster._delete(self.cluster.services, "Service", namespace, name)


class FakeHandle:
    def __init__(self, cluster):
        self.apps = FakeAppsApi(cluster)
        self.core = FakeCoreApi(cluster)
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def cluster():
    return FakeCluster()


@pytest.fixture
def handle(cluster):
    return FakeHandle(cluster)


@pytest.fixture
def binding():
    return Binding("fy20047-k8s", "practice2")


@pytest.fixture
def workload_spec(binding):
    return WorkloadSpec(
        name="hello-app1",
        namespace="default",
        binding=binding,
        image="nginx:1.14.2",
        replicas=1,
        container_port=80,
    )


@pytest.fixture
def service_spec(binding):
    return ServiceSpec(
        name="hello-service",
        namespace="default",
        binding=binding,
        port=80,
        target_port=80,
        node_port=30080,
        routing_mode=RoutingMode.NODE_EXPOSED,
    )


@pytest.fixture
def settings():
    return Settings(poll_interval=0.01)
