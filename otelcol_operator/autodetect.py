"""Detection of traits of the cluster the operator runs in."""

from __future__ import annotations

import json
import urllib.request
from enum import Enum

_OPENSHIFT_ROUTE_GROUP = "route.openshift.io"


class Platform(str, Enum):
    """The kind of cluster the operator is running on."""

    UNKNOWN = "Unknown"
    KUBERNETES = "Kubernetes"
    OPENSHIFT = "OpenShift"


class AutoDetect:
    """Detects traits of a cluster by querying its API server."""

    def __init__(self, host: str, timeout: float = 10.0) -> None:
        self.host = host.rstrip("/")
        self.timeout = timeout

    def _server_groups(self) -> list[dict]:
        request = urllib.request.Request(
            f"{self.host}/apis", headers={"Accept": "application/json"}
        )
        with urllib.request.urlopen(request, timeout=self.timeout) as response:
            document = json.load(response)
        if not isinstance(document, dict):
            raise ValueError("the API server returned an unexpected group list")
        return document.get("groups") or []

    def platform(self) -> Platform:
        """Return the detected platform.

        Raises OSError when the API server cannot be queried and ValueError
        when its answer cannot be understood.
        """
        for group in self._server_groups():
            if isinstance(group, dict) and group.get("name") == _OPENSHIFT_ROUTE_GROUP:
                return Platform.OPENSHIFT
        return Platform.KUBERNETES