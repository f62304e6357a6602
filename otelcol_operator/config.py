"""The operator's runtime configuration."""

from __future__ import annotations

import argparse
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Protocol

from .autodetect import Platform
from .version import Version, get as get_version

DEFAULT_AUTO_DETECT_FREQUENCY = 5.0
DEFAULT_COLLECTOR_CONFIG_MAP_ENTRY = "collector.yaml"


class _PlatformDetector(Protocol):
    def platform(self) -> Platform: ...


class Config:
    """Static configuration of the operator, refreshed by auto-detection."""

    def __init__(
        self,
        *,
        auto_detect: _PlatformDetector | None = None,
        auto_detect_frequency: float = DEFAULT_AUTO_DETECT_FREQUENCY,
        collector_image: str = "",
        collector_config_map_entry: str = DEFAULT_COLLECTOR_CONFIG_MAP_ENTRY,
        logger: logging.Logger | None = None,
        on_change: Iterable[Callable[[], None]] = (),
        platform: Platform = Platform.UNKNOWN,
        version: Version | None = None,
    ) -> None:
        self._auto_detect = auto_detect
        self._auto_detect_frequency = auto_detect_frequency
        self._collector_config_map_entry = collector_config_map_entry
        self._logger = logger or logging.getLogger("config")
        self._on_change = list(on_change)
        self._platform = platform
        self._version = version if version is not None else get_version()
        self._collector_image = collector_image or (
            f"otel/opentelemetry-collector:{self._version.opentelemetry_collector}"
        )
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._worker: threading.Thread | None = None

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register the user-modifiable settings as command-line options."""
        parser.add_argument(
            "--otelcol-image",
            default=self._collector_image,
            help=(
                "The default image to use for OpenTelemetry Collector when not "
                "specified in the individual custom resource (CR)"
            ),
        )

    def apply_arguments(self, namespace: argparse.Namespace) -> None:
        """Take over the settings parsed by a parser set up with add_arguments."""
        image = getattr(namespace, "otelcol_image", None)
        if image:
            self._collector_image = image

    def start_auto_detect(self) -> None:
        """Run auto-detection once, then keep repeating it in the background."""
        try:
            self.auto_detect()
        finally:
            if self._worker is None or not self._worker.is_alive():
                self._stop.clear()
                self._worker = threading.Thread(
                    target=self._periodic_auto_detect,
                    name="config-auto-detect",
                    daemon=True,
                )
                self._worker.start()

    def stop_auto_detect(self) -> None:
        """Stop the background auto-detection, if it runs."""
        self._stop.set()
        if self._worker is not None:
            self._worker.join()
            self._worker = None

    def _periodic_auto_detect(self) -> None:
        while not self._stop.wait(self._auto_detect_frequency):
            try:
                self.auto_detect()
            except Exception as exc:  # keep the background loop alive
                self._logger.info("auto-detection failed: %s", exc)

    def auto_detect(self) -> None:
        """Detect facts about the environment, notifying listeners on change."""
        self._logger.debug("auto-detecting the configuration based on the environment")
        changed = False

        with self._lock:
            if self._platform == Platform.UNKNOWN:
                if self._auto_detect is None:
                    raise RuntimeError("no auto-detection routine is configured")
                detected = self._auto_detect.platform()
                if detected != self._platform:
                    self._logger.debug("platform detected: %s", detected.value)
                    self._platform = detected
                    changed = True

        if changed:
            for callback in self._on_change:
                try:
                    callback()
                except Exception:
                    # the detection itself worked; a failing listener doesn't undo it
                    self._logger.exception(
                        "configuration change notification failed for callback"
                    )

    @property
    def collector_image(self) -> str:
        """The default collector image."""
        return self._collector_image

    @property
    def collector_config_map_entry(self) -> str:
        """The name of the collector's configuration file."""
        return self._collector_config_map_entry

    @property
    def platform(self) -> Platform:
        """The platform the operator is running on."""
        return self._platform

    @property
    def version(self) -> Version:
        """The versions used by the operator."""
        return self._version