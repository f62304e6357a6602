# otelcol-operator

Building blocks for running OpenTelemetry Collector instances on Kubernetes:

- a model of the `OpenTelemetryCollector` custom resource (`opentelemetry.io/v1alpha1`), with its defaulting and validation rules;
- the operator's runtime configuration, which picks a default collector image and can detect whether the cluster is plain Kubernetes or OpenShift;
- the common labels and pod annotations for managed objects;
- parsing of a collector configuration (YAML) to find the service ports its receivers need.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Modules

| Module | What it holds |
| --- | --- |
| `otelcol_operator.version` | `Version`, `get()`, `opentelemetry_collector()` |
| `otelcol_operator.api` | `Mode`, `ObjectMeta`, `OpenTelemetryCollector`, `OpenTelemetryCollectorSpec`, `OpenTelemetryCollectorStatus`, `OpenTelemetryCollectorList`, `ValidationError` |
| `otelcol_operator.autodetect` | `Platform`, `AutoDetect` |
| `otelcol_operator.config` | `Config` |
| `otelcol_operator.collector` | `labels()`, `annotations()` |
| `otelcol_operator.receivers` | `ServicePort`, `ReceiverParser`, `GenericReceiver`, the parser registry and the default-port parsers |
| `otelcol_operator.protocols` | `JaegerReceiverParser`, `OTLPReceiverParser` |
| `otelcol_operator.adapters` | `config_from_string()`, `config_to_receiver_ports()` and their errors |

## Versions

`version.get()` returns a `Version` with the operator version, build date,
collector version and the running Python version.
`version.opentelemetry_collector()` gives the default collector version,
`"0.0.0"` when none was set at build time.

## Defaulting and validating a collector

```python
from otelcol_operator.api import Mode, ObjectMeta, OpenTelemetryCollector, ValidationError

otelcol = OpenTelemetryCollector(metadata=ObjectMeta(name="my-instance", namespace="observability"))
otelcol.default()
# otelcol.spec.mode is Mode.DEPLOYMENT and the
# "app.kubernetes.io/managed-by" label is "opentelemetry-operator"

otelcol.spec.mode = Mode.SIDECAR
otelcol.spec.replicas = 2
try:
    otelcol.validate_create()
except ValidationError as err:
    print(err)  # ... mode is set to sidecar, which does not support the attribute 'replicas'
```

`validate_create()` and `validate_update(old)` return `True` when the spec is
accepted and raise `ValidationError` when:

- `volume_claim_templates` is set and the mode is not `statefulset`;
- `replicas` is set and the mode is `sidecar` or `daemonset`;
- `tolerations` is set and the mode is `sidecar`.

`validate_delete()` always returns `True`.

## Labels and annotations

```python
from otelcol_operator.collector import annotations, labels

labels(otelcol)["app.kubernetes.io/instance"]                 # "observability.my-instance"
annotations(otelcol)["opentelemetry-operator-config/sha256"]  # SHA-256 of spec.config
```

The instance's own labels are kept, but the four `app.kubernetes.io/*` labels
always take the operator's values. The default Prometheus scrape annotations
(`prometheus.io/scrape`, `prometheus.io/port`, `prometheus.io/path`) can be
overridden through the instance's own annotations; the configuration checksum
is always recomputed.

## Finding the ports a configuration needs

```python
from otelcol_operator.adapters import config_from_string, config_to_receiver_ports

config = config_from_string("""
receivers:
  otlp:
    protocols:
      grpc:
  jaeger:
    protocols:
      thrift_compact:
  zipkin:
""")

for port in config_to_receiver_ports(config):
    print(port.name, port.port, port.protocol)
```

Each result is a `ServicePort` with `name`, `port`, `protocol` (`"TCP"` or
`"UDP"` for Jaeger ports, empty otherwise) and `target_port` (set for OTLP
default ports).

Receivers are matched to parsers by the part of their name before any `/`
(`jaeger/custom` uses the Jaeger parser). Registered parsers: `carbon`,
`collectd`, `opencensus`, `sapm`, `signalfx`, `wavefront`, `zipkin-scribe`,
`zipkin`, `jaeger` and `otlp`. Unknown receivers fall back to a generic parser
that reads their `endpoint`. Your own parsers can be added with
`otelcol_operator.receivers.register(name, builder)`, where `builder` takes a
receiver name and its configuration and returns a `ReceiverParser`.

Port names are the receiver name with `/` and `_` turned into `-`; when that
is longer than 63 characters or not a valid DNS label, `port-<number>` is used.

Invalid YAML, or YAML that is not a mapping, raises `InvalidYAMLError`; an
empty string gives an empty mapping. A configuration without receivers raises
`NoReceiversError`; a `receivers` entry that is not a mapping raises
`ReceiversNotAMapError`. A receiver whose parser fails is logged and skipped.

## Operator configuration

```python
from otelcol_operator.config import Config
from otelcol_operator.autodetect import AutoDetect

cfg = Config(auto_detect=AutoDetect("https://kubernetes.default.svc"))
cfg.collector_image            # "otel/opentelemetry-collector:<collector version>"
cfg.start_auto_detect()        # detect once now, then periodically in the background
cfg.platform                   # Platform.KUBERNETES or Platform.OPENSHIFT
cfg.stop_auto_detect()
```

`AutoDetect.platform()` reads the API groups served at `<host>/apis` and
reports OpenShift when `route.openshift.io` is among them. It makes a plain
HTTP request with no authentication or TLS settings of its own.

`Config` takes keyword arguments `auto_detect`, `auto_detect_frequency`
(seconds, default 5), `collector_image`, `collector_config_map_entry`
(default `"collector.yaml"`), `logger`, `on_change` (callables run when the
detected platform changes), `platform` and `version`. Detection only runs while
the platform is still `Platform.UNKNOWN`; calling `auto_detect()` then without
a detector raises `RuntimeError`.

`Config.add_arguments(parser)` adds an `--otelcol-image` option to an
`argparse.ArgumentParser`, and `Config.apply_arguments(namespace)` takes the
parsed value over.

## What this package does not do

It is a library only. It has no command to run, does not connect to a cluster
with credentials, and does not create or update Kubernetes objects: there is no
reconciliation loop, no admission webhook server and no sidecar injection. The
resource model, defaulting, validation, labels, annotations and port inference
are meant to be used by a program that does those things.