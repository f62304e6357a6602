"""The OpenTelemetryCollector resource: its types, defaulting and validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

GROUP = "opentelemetry.io"
VERSION = "v1alpha1"
GROUP_VERSION = f"{GROUP}/{VERSION}"

MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
MANAGED_BY_VALUE = "opentelemetry-operator"

_log = logging.getLogger("opentelemetrycollector-resource")


class Mode(str, Enum):
    """How the collector is deployed."""

    DAEMON_SET = "daemonset"
    DEPLOYMENT = "deployment"
    SIDECAR = "sidecar"
    STATEFUL_SET = "statefulset"


class ValidationError(ValueError):
    """Raised when a collector resource's spec is not acceptable."""


@dataclass
class ObjectMeta:
    """The identifying metadata of a resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None


@dataclass
class OpenTelemetryCollectorSpec:
    """The desired state of a collector."""

    config: str = ""
    args: dict[str, str] | None = None
    replicas: int | None = None
    image: str = ""
    mode: Mode | None = None
    service_account: str = ""
    security_context: dict[str, Any] | None = None
    volume_claim_templates: list[dict[str, Any]] = field(default_factory=list)
    volume_mounts: list[dict[str, Any]] = field(default_factory=list)
    volumes: list[dict[str, Any]] = field(default_factory=list)
    ports: list[dict[str, Any]] = field(default_factory=list)
    env: list[dict[str, Any]] | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    tolerations: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class OpenTelemetryCollectorStatus:
    """The observed state of a collector."""

    replicas: int = 0
    version: str = ""
    messages: list[str] = field(default_factory=list)


@dataclass
class OpenTelemetryCollector:
    """A collector resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: OpenTelemetryCollectorSpec = field(default_factory=OpenTelemetryCollectorSpec)
    status: OpenTelemetryCollectorStatus = field(
        default_factory=OpenTelemetryCollectorStatus
    )
    api_version: str = GROUP_VERSION
    kind: str = "OpenTelemetryCollector"

    def default(self) -> None:
        """Fill in the defaults for mode and the managed-by label."""
        if not self.spec.mode:
            self.spec.mode = Mode.DEPLOYMENT

        if self.metadata.labels is None:
            self.metadata.labels = {}
        if not self.metadata.labels.get(MANAGED_BY_LABEL):
            self.metadata.labels[MANAGED_BY_LABEL] = MANAGED_BY_VALUE

        _log.info("default name=%s", self.metadata.name)

    def validate_create(self) -> bool:
        """Check the spec of a resource being created; True when accepted."""
        return self._admit("create", check_spec=True)

    def validate_update(self, old: OpenTelemetryCollector | None) -> bool:
        """Check the spec of a resource being updated; True when accepted."""
        return self._admit("update", check_spec=True)

    def validate_delete(self) -> bool:
        """Deletion is always accepted; returns True."""
        return self._admit("delete", check_spec=False)

    def _admit(self, action: str, *, check_spec: bool) -> bool:
        _log.info("validate %s name=%s", action, self.metadata.name)
        if check_spec:
            self._validate_spec()
        return True

    def _validate_spec(self) -> None:
        spec = self.spec
        mode = spec.mode.value if spec.mode else ""

        if spec.mode != Mode.STATEFUL_SET and spec.volume_claim_templates:
            raise ValidationError(_unsupported(mode, "volumeClaimTemplates"))

        if spec.mode in (Mode.SIDECAR, Mode.DAEMON_SET) and spec.replicas is not None:
            raise ValidationError(_unsupported(mode, "replicas"))

        if spec.mode == Mode.SIDECAR and spec.tolerations:
            raise ValidationError(_unsupported(mode, "tolerations"))


def _unsupported(mode: str, attribute: str) -> str:
    return (
        f"the OpenTelemetry Collector mode is set to {mode}, "
        f"which does not support the attribute '{attribute}'"
    )


@dataclass
class OpenTelemetryCollectorList:
    """A list of collector resources."""

    items: list[OpenTelemetryCollector] = field(default_factory=list)
    api_version: str = GROUP_VERSION
    kind: str = "OpenTelemetryCollectorList"