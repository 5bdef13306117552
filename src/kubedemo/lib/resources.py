"""
resources.py
- Create / read / delete calls for the two managed resources.
- Every call blocks until the API server answers; rejections surface as ApiCallError.
- No update or patch path: creating an existing name is a conflict, not a no-op.
"""

from contextlib import contextmanager
from dataclasses import dataclass

from kubernetes.client.rest import ApiException
from loguru import logger
from urllib3.exceptions import HTTPError

from kubedemo.core.errors import ApiCallError
from kubedemo.lib.specs import build_deployment, build_service

DEPLOYMENT = "Deployment"
SERVICE = "Service"


@dataclass(frozen=True)
class ResourceRef:
    """What a create call hands back: enough to get or delete the object later."""
    kind: str
    namespace: str
    name: str

    def __str__(self):
        return f"{self.namespace}/{self.name}"


@contextmanager
def api_call(operation, kind, namespace, name):
    """Translate client-library failures into ApiCallError."""
    try:
        yield
    except ApiException as e:
        raise ApiCallError(operation, kind, namespace, name, status=e.status, reason=e.reason) from e
    except HTTPError as e:
        raise ApiCallError(operation, kind, namespace, name, reason=str(e)) from e


def _ref_from(kind, created, fallback_namespace):
    meta = created.metadata
    return ResourceRef(kind, meta.namespace or fallback_namespace, meta.name)


def declare_workload(handle, spec):
    """Submit a Deployment for spec. Does not wait for pods to become ready."""
    body = build_deployment(spec)
    with api_call("create", DEPLOYMENT, spec.namespace, spec.name):
        created = handle.apps.create_namespaced_deployment(namespace=spec.namespace, body=body)

    ref = _ref_from(DEPLOYMENT, created, spec.namespace)
    logger.info(f"[declare] Created Deployment {ref}")
    return ref


def declare_service(handle, spec):
    """Submit a Service whose selector is the workload binding."""
    body = build_service(spec)
    with api_call("create", SERVICE, spec.namespace, spec.name):
        created = handle.core.create_namespaced_service(namespace=spec.namespace, body=body)

    ref = _ref_from(SERVICE, created, spec.namespace)
    logger.info(f"[declare] Created Service {ref} ({spec.routing_mode.value}, selector {spec.binding})")
    return ref


def get_workload(handle, ref):
    with api_call("get", ref.kind, ref.namespace, ref.name):
        return handle.apps.read_namespaced_deployment(name=ref.name, namespace=ref.namespace)


def delete_workload(handle, ref):
    with api_call("delete", ref.kind, ref.namespace, ref.name):
        handle.apps.delete_namespaced_deployment(name=ref.name, namespace=ref.namespace)
    logger.info(f"[delete] Deleted Deployment {ref}")


def delete_service(handle, ref):
    with api_call("delete", ref.kind, ref.namespace, ref.name):
        handle.core.delete_namespaced_service(name=ref.name, namespace=ref.namespace)
    logger.info(f"[delete] Deleted Service {ref}")
