"""Versions of the operator and of the components it manages."""

from __future__ import annotations

import platform
from dataclasses import dataclass

# Filled in at build time; empty when running from a source checkout.
_version = ""
_build_date = ""
_otel_col = ""

_FALLBACK_COLLECTOR_VERSION = "0.0.0"


@dataclass(frozen=True)
class Version:
    """The operator's version and the versions of the components it uses."""

    operator: str = ""
    build_date: str = ""
    opentelemetry_collector: str = ""
    python: str = ""

    def __str__(self) -> str:
        return (
            f"Version(Operator='{self.operator}', "
            f"BuildDate='{self.build_date}', "
            f"OpenTelemetryCollector='{self.opentelemetry_collector}', "
            f"Python='{self.python}')"
        )


def get() -> Version:
    """Return the version information for this build."""
    return Version(
        operator=_version,
        build_date=_build_date,
        opentelemetry_collector=opentelemetry_collector(),
        python=platform.python_version(),
    )


def opentelemetry_collector() -> str:
    """Return the default collector version, used when none is configured."""
    if _otel_col:
        return _otel_col
    return _FALLBACK_COLLECTOR_VERSION