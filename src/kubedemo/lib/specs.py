"""
specs.py
- Declarative descriptions of the two managed resources and their manifest builders.
- WorkloadSpec -> apps/v1 Deployment
- ServiceSpec  -> core/v1 Service
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from kubernetes import client as k8s_client

from kubedemo.core import constants
from kubedemo.core.errors import ConfigError
from kubedemo.lib.binding import Binding


class RoutingMode(Enum):
    CLUSTER_LOCAL = "ClusterIP"
    NODE_EXPOSED = "NodePort"
    LOAD_BALANCED = "LoadBalancer"

    @classmethod
    def parse(cls, value):
        """Accept either the enum-style name (NodeExposed) or the Service type (NodePort)."""
        if isinstance(value, cls):
            return value
        aliases = {
            "clusterlocal": cls.CLUSTER_LOCAL,
            "nodeexposed": cls.NODE_EXPOSED,
            "loadbalanced": cls.LOAD_BALANCED,
        }
        normalized = str(value).replace("_", "").replace("-", "").lower()
        if normalized in aliases:
            return aliases[normalized]
        for mode in cls:
            if mode.value.lower() == normalized:
                return mode
        raise ConfigError(f"Unknown routing mode: {value!r}")

    @property
    def exposes_node_port(self):
        return self is not RoutingMode.CLUSTER_LOCAL


def _check_name(kind, name):
    if not name:
        raise ConfigError(f"{kind} name must not be empty")


def _check_port(what, port, bounds=constants.PORT_RANGE):
    low, high = bounds
    if not isinstance(port, int) or not low <= port <= high:
        raise ConfigError(f"{what} must be an integer in {low}-{high}, got {port!r}")


@dataclass(frozen=True)
class WorkloadSpec:
    name: str
    namespace: str
    binding: Binding
    image: str
    replicas: int = constants.DEFAULT_REPLICAS
    container_port: int = constants.DEFAULT_CONTAINER_PORT
    container_name: str = constants.DEFAULT_CONTAINER_NAME
    port_name: str = constants.DEFAULT_PORT_NAME

    def __post_init__(self):
        _check_name("Deployment", self.name)
        _check_name("Namespace", self.namespace)
        if not self.image:
            raise ConfigError("Container image must not be empty")
        if not isinstance(self.replicas, int) or self.replicas < 0:
            raise ConfigError(f"Replica count must be a non-negative integer, got {self.replicas!r}")
        _check_port("Container port", self.container_port)

    @property
    def labels(self) -> Dict[str, str]:
        return self.binding.labels()


@dataclass(frozen=True)
class ServiceSpec:
    name: str
    namespace: str
    binding: Binding
    port: int = constants.DEFAULT_SERVICE_PORT
    target_port: int = constants.DEFAULT_TARGET_PORT
    node_port: Optional[int] = constants.DEFAULT_NODE_PORT
    routing_mode: RoutingMode = RoutingMode.NODE_EXPOSED
    port_name: str = constants.DEFAULT_PORT_NAME

    def __post_init__(self):
        _check_name("Service", self.name)
        _check_name("Namespace", self.namespace)
        _check_port("Service port", self.port)
        _check_port("Target port", self.target_port)
        if self.node_port is not None:
            if not self.routing_mode.exposes_node_port:
                raise ConfigError(f"Node port {self.node_port} requires a node-exposed routing mode")
            _check_port("Node port", self.node_port, constants.NODE_PORT_RANGE)

    @property
    def labels(self) -> Dict[str, str]:
        return self.binding.labels()

    @property
    def selector(self) -> Dict[str, str]:
        return self.binding.labels()


def build_deployment(spec: WorkloadSpec) -> k8s_client.V1Deployment:
    """Render a WorkloadSpec as a Deployment whose selector and pod template carry the binding."""
    container = k8s_client.V1Container(
        name=spec.container_name,
        image=spec.image,
        ports=[
            k8s_client.V1ContainerPort(
                name=spec.port_name,
                container_port=spec.container_port,
                protocol="TCP",
            )
        ],
    )
    template = k8s_client.V1PodTemplateSpec(
        metadata=k8s_client.V1ObjectMeta(labels=spec.labels),
        spec=k8s_client.V1PodSpec(containers=[container]),
    )
    return k8s_client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=k8s_client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=spec.labels,
        ),
        spec=k8s_client.V1DeploymentSpec(
            replicas=spec.replicas,
            selector=k8s_client.V1LabelSelector(match_labels=spec.labels),
            template=template,
        ),
    )


def build_service(spec: ServiceSpec) -> k8s_client.V1Service:
    """Render a ServiceSpec; nodePort is only set for node-exposed routing modes."""
    port = k8s_client.V1ServicePort(
        name=spec.port_name,
        port=spec.port,
        target_port=spec.target_port,
        protocol="TCP",
    )
    if spec.routing_mode.exposes_node_port and spec.node_port is not None:
        port.node_port = spec.node_port

    return k8s_client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=k8s_client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=spec.labels,
        ),
        spec=k8s_client.V1ServiceSpec(
            type=spec.routing_mode.value,
            selector=spec.selector,
            ports=[port],
        ),
    )


def specs_from_settings(settings):
    """Build the (WorkloadSpec, ServiceSpec) pair from one Settings object and one shared Binding."""
    binding = Binding(settings.label_key, settings.label_value)
    routing_mode = RoutingMode.parse(settings.routing_mode)

    workload = WorkloadSpec(
        name=settings.workload_name,
        namespace=settings.namespace,
        binding=binding,
        image=settings.image,
        replicas=settings.replicas,
        container_port=settings.container_port,
    )
    service = ServiceSpec(
        name=settings.service_name,
        namespace=settings.namespace,
        binding=binding,
        port=settings.service_port,
        target_port=settings.target_port,
        node_port=settings.node_port if routing_mode.exposes_node_port else None,
        routing_mode=routing_mode,
    )
    return workload, service
