from otelcol_operator.api import ObjectMeta, OpenTelemetryCollector, OpenTelemetryCollectorSpec
from otelcol_operator.collector import annotations, labels

TEST_SHA = "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"


def test_labels_common_set():
    otelcol = OpenTelemetryCollector(
        metadata=ObjectMeta(name="my-instance", namespace="my-ns")
    )
    result = labels(otelcol)
    assert result["app.kubernetes.io/managed-by"] == "opentelemetry-operator"
    assert result["app.kubernetes.io/instance"] == "my-ns.my-instance"
    assert result["app.kubernetes.io/part-of"] == "opentelemetry"
    assert result["app.kubernetes.io/component"] == "opentelemetry-collector"


def test_labels_propagate_down():
    otelcol = OpenTelemetryCollector(metadata=ObjectMeta(labels={"myapp": "mycomponent"}))
    result = labels(otelcol)
    assert len(result) == 5
    assert result["myapp"] == "mycomponent"


def test_labels_do_not_touch_instance():
    original = {"myapp": "mycomponent"}
    otelcol = OpenTelemetryCollector(metadata=ObjectMeta(labels=original))
    labels(otelcol)
    assert original == {"myapp": "mycomponent"}


def test_default_annotations():
    otelcol = OpenTelemetryCollector(
        metadata=ObjectMeta(name="my-instance", namespace="my-ns"),
        spec=OpenTelemetryCollectorSpec(config="test"),
    )
    result = annotations(otelcol)
    assert result["prometheus.io/scrape"] == "true"
    assert result["prometheus.io/port"] == "8888"
    assert result["prometheus.io/path"] == "/metrics"
    assert result["opentelemetry-operator-config/sha256"] == TEST_SHA


def test_user_annotations():
    otelcol = OpenTelemetryCollector(
        metadata=ObjectMeta(
            name="my-instance",
            namespace="my-ns",
            annotations={
                "prometheus.io/scrape": "false",
                "prometheus.io/port": "1234",
                "prometheus.io/path": "/test",
                "opentelemetry-operator-config/sha256": "shouldBeOverwritten",
            },
        ),
        spec=OpenTelemetryCollectorSpec(config="test"),
    )
    result = annotations(otelcol)
    assert result["prometheus.io/scrape"] == "false"
    assert result["prometheus.io/port"] == "1234"
    assert result["prometheus.io/path"] == "/test"
    assert result["opentelemetry-operator-config/sha256"] == TEST_SHA


def test_annotations_propagate_down():
    otelcol = OpenTelemetryCollector(
        metadata=ObjectMeta(annotations={"myapp": "mycomponent"})
    )
    result = annotations(otelcol)
    assert len(result) == 5
    assert result["myapp"] == "mycomponent"