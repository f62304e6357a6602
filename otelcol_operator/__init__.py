"""Collector resource model, configuration, labels, annotations and receiver port inference for an OpenTelemetry Collector operator."""

__version__ = "0.1.0"