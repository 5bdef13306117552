from dataclasses import replace
from unittest.mock import MagicMock

import pytest
from urllib3.exceptions import ProtocolError

from kubedemo.core.errors import ApiCallError
from kubedemo.lib.resources import (
    ResourceRef,
    declare_service,
    declare_workload,
    delete_service,
    delete_workload,
    get_workload,
)


def test_declare_workload_then_get_returns_same_name(handle, workload_spec):
    ref = declare_workload(handle, workload_spec)

    assert ref == ResourceRef("Deployment", "default", "hello-app1")
    assert str(ref) == "default/hello-app1"
    assert get_workload(handle, ref).metadata.name == "hello-app1"


def test_duplicate_workload_is_conflict_and_keeps_original(handle, cluster, workload_spec):
    declare_workload(handle, workload_spec)
    original_uid = cluster.deployments[("default", "hello-app1")].metadata.uid

    with pytest.raises(ApiCallError) as excinfo:
        declare_workload(handle, replace(workload_spec, image="nginx:latest"))

    assert excinfo.value.is_conflict
    assert excinfo.value.operation == "create"
    stored = cluster.deployments[("default", "hello-app1")]
    assert stored.metadata.uid == original_uid
    assert stored.spec.template.spec.containers[0].image == "nginx:1.14.2"


def test_duplicate_service_is_conflict(handle, service_spec):
    ref = declare_service(handle, service_spec)
    assert ref == ResourceRef("Service", "default", "hello-service")

    with pytest.raises(ApiCallError) as excinfo:
        declare_service(handle, service_spec)
    assert excinfo.value.status == 409


def test_declared_service_selects_workload_pods(handle, cluster, workload_spec, service_spec):
    declare_workload(handle, workload_spec)
    declare_service(handle, service_spec)

    pod_labels = cluster.deployments[("default", "hello-app1")].spec.template.metadata.labels
    selector = cluster.services[("default", "hello-service")].spec.selector
    assert selector.items() <= pod_labels.items()


def test_get_missing_workload_is_not_found(handle):
    with pytest.raises(ApiCallError) as excinfo:
        get_workload(handle, ResourceRef("Deployment", "default", "ghost"))

    assert excinfo.value.is_not_found
    assert "get Deployment default/ghost" in str(excinfo.value)


def test_delete_removes_both_resources(handle, cluster, workload_spec, service_spec):
    workload_ref = declare_workload(handle, workload_spec)
    service_ref = declare_service(handle, service_spec)

    delete_workload(handle, workload_ref)
    delete_service(handle, service_ref)

    assert cluster.deployments == {}
    assert cluster.services == {}


def test_transport_error_becomes_api_call_error(workload_spec):
    broken = MagicMock()
    broken.apps.create_namespaced_deployment.side_effect = ProtocolError("connection reset")

    with pytest.raises(ApiCallError) as excinfo:
        declare_workload(broken, workload_spec)

    assert excinfo.value.status is None
    assert "no response" in str(excinfo.value)
