"""Labels and annotations shared by the objects of a managed collector."""

from __future__ import annotations

import hashlib

from .api import OpenTelemetryCollector

CONFIG_SHA_ANNOTATION = "opentelemetry-operator-config/sha256"


def labels(instance: OpenTelemetryCollector) -> dict[str, str]:
    """Return the common labels of all objects belonging to the instance."""
    meta = instance.metadata
    result = dict(meta.labels or {})
    result["app.kubernetes.io/managed-by"] = "opentelemetry-operator"
    result["app.kubernetes.io/instance"] = f"{meta.namespace}.{meta.name}"
    result["app.kubernetes.io/part-of"] = "opentelemetry"
    result["app.kubernetes.io/component"] = "opentelemetry-collector"
    return result


def annotations(instance: OpenTelemetryCollector) -> dict[str, str]:
    """Return the annotations for the instance's pods."""
    result = {
        "prometheus.io/scrape": "true",
        "prometheus.io/port": "8888",
        "prometheus.io/path": "/metrics",
    }
    result.update(instance.metadata.annotations or {})
    result[CONFIG_SHA_ANNOTATION] = hashlib.sha256(
        instance.spec.config.encode("utf-8")
    ).hexdigest()
    return result