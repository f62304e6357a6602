"""Conversion of a collector configuration into the data the operator needs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import yaml

from . import protocols as _protocols  # noqa: F401  registers the protocol parsers
from .receivers import ServicePort, parser_for

_log = logging.getLogger("adapters")


class InvalidYAMLError(ValueError):
    """The collector configuration is not a valid YAML mapping."""

    def __init__(self) -> None:
        super().__init__("couldn't parse the opentelemetry-collector configuration")


class NoReceiversError(ValueError):
    """The configuration has no receivers."""

    def __init__(self) -> None:
        super().__init__("no receivers available as part of the configuration")


class ReceiversNotAMapError(ValueError):
    """The receivers property is not a mapping of receivers."""

    def __init__(self) -> None:
        super().__init__(
            "receivers property in the configuration doesn't contain valid receivers"
        )


def config_from_string(config_str: str) -> dict[Any, Any]:
    """Parse a collector configuration into a mapping.

    Raises InvalidYAMLError when the text is not a YAML mapping.
    """
    try:
        document = yaml.safe_load(config_str)
    except yaml.YAMLError as exc:
        raise InvalidYAMLError() from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise InvalidYAMLError()
    return document


def config_to_receiver_ports(config: Mapping[Any, Any]) -> list[ServicePort]:
    """Return the service ports required by the configuration's receivers.

    Raises NoReceiversError when there is no receivers property and
    ReceiversNotAMapError when it is not a mapping.
    """
    if "receivers" not in config:
        raise NoReceiversError()
    receivers = config["receivers"]
    if not isinstance(receivers, Mapping):
        raise ReceiversNotAMapError()

    ports: list[ServicePort] = []
    for key, value in receivers.items():
        if isinstance(value, Mapping):
            receiver = value
        else:
            _log.info("receiver doesn't seem to be a map of properties: %s", key)
            receiver = {}

        name = str(key)
        try:
            ports.extend(parser_for(name, receiver).ports())
        except Exception:
            # a faulty parser shouldn't keep the other receivers' ports out
            _log.exception("parser for '%s' has returned an error", name)
    return ports