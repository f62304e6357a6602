import argparse
import threading

import pytest

from otelcol_operator.autodetect import Platform
from otelcol_operator.config import Config
from otelcol_operator.version import Version


class MockAutoDetect:
    def __init__(self, result=Platform.UNKNOWN, on_call=None):
        self.result = result
        self.on_call = on_call
        self.calls = 0

    def platform(self):
        self.calls += 1
        if self.on_call is not None:
            self.on_call()
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def test_new_config():
    cfg = Config(
        collector_image="some-image",
        collector_config_map_entry="some-config.yaml",
        platform=Platform.KUBERNETES,
    )
    assert cfg.collector_image == "some-image"
    assert cfg.collector_config_map_entry == "some-config.yaml"
    assert cfg.platform == Platform.KUBERNETES


def test_defaults():
    cfg = Config()
    assert cfg.collector_config_map_entry == "collector.yaml"
    assert cfg.platform == Platform.UNKNOWN
    assert cfg.collector_image == "otel/opentelemetry-collector:0.0.0"


def test_override_version():
    cfg = Config(version=Version(opentelemetry_collector="the-version"))
    assert "the-version" in cfg.collector_image
    assert cfg.version.opentelemetry_collector == "the-version"


def test_callback_on_changes():
    called = []
    cfg = Config(
        auto_detect=MockAutoDetect(Platform.OPENSHIFT),
        on_change=[lambda: called.append(True)],
    )
    assert cfg.platform == Platform.UNKNOWN

    cfg.auto_detect()

    assert cfg.platform == Platform.OPENSHIFT
    assert called == [True]


def test_no_callback_without_change():
    called = []
    cfg = Config(
        auto_detect=MockAutoDetect(Platform.UNKNOWN),
        on_change=[lambda: called.append(True)],
    )
    cfg.auto_detect()
    assert called == []
    assert cfg.platform == Platform.UNKNOWN


def test_known_platform_is_not_detected_again():
    mock = MockAutoDetect(Platform.OPENSHIFT)
    cfg = Config(auto_detect=mock, platform=Platform.KUBERNETES)
    cfg.auto_detect()
    assert mock.calls == 0
    assert cfg.platform == Platform.KUBERNETES


def test_failing_callback_does_not_fail_detection():
    called = []

    def failing():
        raise RuntimeError("boom")

    cfg = Config(
        auto_detect=MockAutoDetect(Platform.KUBERNETES),
        on_change=[failing, lambda: called.append(True)],
    )
    cfg.auto_detect()
    assert cfg.platform == Platform.KUBERNETES
    assert called == [True]


def test_detection_error_propagates():
    cfg = Config(auto_detect=MockAutoDetect(ConnectionError("down")))
    with pytest.raises(ConnectionError):
        cfg.auto_detect()
    assert cfg.platform == Platform.UNKNOWN


def test_auto_detect_in_background():
    lock = threading.Lock()
    count = [0]
    done = threading.Event()

    def on_call():
        with lock:
            count[0] += 1
            if count[0] >= 2:
                done.set()

    cfg = Config(
        auto_detect=MockAutoDetect(Platform.UNKNOWN, on_call),
        auto_detect_frequency=0.1,
    )
    assert cfg.platform == Platform.UNKNOWN

    cfg.start_auto_detect()
    try:
        assert done.wait(timeout=5)
    finally:
        cfg.stop_auto_detect()
    assert count[0] >= 2


def test_command_line_overrides_image():
    cfg = Config(collector_image="default-image")
    parser = argparse.ArgumentParser()
    cfg.add_arguments(parser)

    defaults = parser.parse_args([])
    assert defaults.otelcol_image == "default-image"

    cfg.apply_arguments(parser.parse_args(["--otelcol-image", "custom-image"]))
    assert cfg.collector_image == "custom-image"