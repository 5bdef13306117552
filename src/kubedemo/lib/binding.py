"""
binding.py
- The single label pair that ties a Service to the pods of a Deployment.
- Both spec builders take the same Binding, so the pod template labels and the
  service selector are always identical.
"""

import re
from dataclasses import dataclass

from kubedemo.core.errors import ConfigError

# Kubernetes label value syntax (name part of keys uses the same character set).
_LABEL_RE = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)?$")


@dataclass(frozen=True)
class Binding:
    key: str
    value: str

    def __post_init__(self):
        name = self.key.rsplit("/", 1)[-1]
        if not name or len(name) > 63 or not _LABEL_RE.match(name):
            raise ConfigError(f"Invalid label key: {self.key!r}")
        if len(self.value) > 63 or not _LABEL_RE.match(self.value):
            raise ConfigError(f"Invalid label value: {self.value!r}")

    def labels(self):
        """Return a fresh {key: value} dict; callers may mutate it freely."""
        return {self.key: self.value}

    def __str__(self):
        return f"{self.key}={self.value}"
