"""
constants.py
- Project-wide defaults for the demo resources.
- Overridable through the resource definition file or CLI flags.
"""

# --- Scope ---
DEFAULT_NAMESPACE = "default"

# --- Shared Label (binds service selector to pod template) ---
DEFAULT_LABEL_KEY = "fy20047-k8s"
DEFAULT_LABEL_VALUE = "practice2"

# --- Workload ---
DEFAULT_WORKLOAD_NAME = "hello-app1"
DEFAULT_IMAGE = "nginx:1.14.2"
DEFAULT_REPLICAS = 1
DEFAULT_CONTAINER_NAME = "nginx-container"
DEFAULT_CONTAINER_PORT = 80
DEFAULT_PORT_NAME = "http"

# --- Service ---
DEFAULT_SERVICE_NAME = "hello-service"
DEFAULT_SERVICE_PORT = 80
DEFAULT_TARGET_PORT = 80
DEFAULT_NODE_PORT = 30080

# --- Polling ---
DEFAULT_POLL_INTERVAL = 1.0  # seconds between observer fetches
OBSERVER_JOIN_TIMEOUT = 5.0  # seconds to wait for observer acknowledgment on drain

# --- Kubernetes limits ---
NODE_PORT_RANGE = (30000, 32767)
PORT_RANGE = (1, 65535)

# --- Kubeconfig ---
KUBECONFIG_RELATIVE_PATH = ".kube/config"
