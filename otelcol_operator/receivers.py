"""Parsers that work out the service ports a collector's receivers need."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

_log = logging.getLogger("receivers")

# DNS_LABEL constraints for port names.
_DNS_LABEL = re.compile(r"(([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9])?")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_MAX_PORT_NAME_LENGTH = 63
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

PARSER_NAME_GENERIC = "__generic"
PARSER_NAME_CARBON = "__carbon"
PARSER_NAME_COLLECTD = "__collectd"
PARSER_NAME_OPENCENSUS = "__opencensus"
PARSER_NAME_SAPM = "__sapm"
PARSER_NAME_SIGNALFX = "__signalfx"
PARSER_NAME_WAVEFRONT = "__wavefront"
PARSER_NAME_ZIPKIN_SCRIBE = "__zipkinscribe"
PARSER_NAME_ZIPKIN = "__zipkin"


@dataclass
class ServicePort:
    """A port to be exposed by the collector's service."""

    name: str = ""
    port: int = 0
    protocol: str = ""
    target_port: int | None = None


class ReceiverParser(ABC):
    """Works out the service ports for one receiver's configuration."""

    @abstractmethod
    def ports(self) -> list[ServicePort]:
        """Return the service ports derived from the receiver's configuration."""

    @abstractmethod
    def parser_name(self) -> str:
        """Return the name of this parser."""


Builder = Callable[[str, Mapping[Any, Any]], ReceiverParser]

_registry: dict[str, Builder] = {}


class GenericReceiver(ReceiverParser):
    """A receiver with at most one port, taken from its endpoint or a default."""

    def __init__(
        self,
        name: str,
        config: Mapping[Any, Any],
        default_port: int = 0,
        parser_name: str = PARSER_NAME_GENERIC,
    ) -> None:
        self.name = name
        self.config = config
        self.default_port = default_port
        self._parser_name = parser_name

    def ports(self) -> list[ServicePort]:
        port = single_port_from_config_endpoint(self.name, self.config)
        if port is not None:
            return [port]
        if self.default_port > 0:
            return [
                ServicePort(
                    name=port_name(self.name, self.default_port),
                    port=self.default_port,
                )
            ]
        return []

    def parser_name(self) -> str:
        return self._parser_name


def builder_for(name: str) -> Builder:
    """Return the parser builder for a receiver name, falling back to the generic one."""
    return _registry.get(receiver_type(name), new_generic_receiver_parser)


def parser_for(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Return a parser for the given receiver name and configuration."""
    return builder_for(name)(name, config)


def register(name: str, builder: Builder) -> None:
    """Make a parser builder known under the given receiver type."""
    _registry[name] = builder


def is_registered(name: str) -> bool:
    """Tell whether a parser builder is registered under the given name."""
    return name in _registry


def single_port_from_config_endpoint(
    name: str, config: Mapping[Any, Any]
) -> ServicePort | None:
    """Return the port given by the configuration's endpoint, if there is one."""
    if "endpoint" not in config:
        _log.debug("receiver doesn't have an endpoint")
        return None

    endpoint = config["endpoint"]
    if not isinstance(endpoint, str):
        _log.info("receiver's endpoint isn't a string")
        return None

    try:
        port = port_from_endpoint(endpoint)
    except ValueError:
        _log.info("couldn't parse the endpoint's port: endpoint=%s", endpoint)
        return None

    return ServicePort(name=port_name(name, port), port=port)


def port_name(receiver_name: str, port: int) -> str:
    """Return a DNS_LABEL-safe port name for the receiver, or a port-based one."""
    if len(receiver_name.encode("utf-8")) > _MAX_PORT_NAME_LENGTH:
        return f"port-{port}"

    candidate = receiver_name.replace("/", "-").replace("_", "-")
    if not _DNS_LABEL.fullmatch(candidate):
        return f"port-{port}"
    return candidate


def port_from_endpoint(endpoint: str) -> int:
    """Return the port after the last colon of an endpoint.

    Raises ValueError when that part is not a 32-bit integer.
    """
    part = endpoint[endpoint.rfind(":") + 1 :]
    if not _INTEGER.fullmatch(part):
        raise ValueError(f"invalid port in endpoint {endpoint!r}")
    port = int(part)
    if not _INT32_MIN <= port <= _INT32_MAX:
        raise ValueError(f"port out of range in endpoint {endpoint!r}")
    return port


def receiver_type(name: str) -> str:
    """Return the receiver type: the part of the name before any slash."""
    return name.partition("/")[0]


def new_generic_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for receivers without a dedicated parser."""
    return GenericReceiver(name, config, parser_name=PARSER_NAME_GENERIC)


def new_carbon_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for Carbon receivers."""
    return GenericReceiver(name, config, 2003, PARSER_NAME_CARBON)


def new_collectd_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for Collectd receivers."""
    return GenericReceiver(name, config, 8081, PARSER_NAME_COLLECTD)


def new_opencensus_receiver_parser(
    name: str, config: Mapping[Any, Any]
) -> ReceiverParser:
    """Build a parser for OpenCensus receivers."""
    return GenericReceiver(name, config, 55678, PARSER_NAME_OPENCENSUS)


def new_sapm_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for SAPM receivers."""
    return GenericReceiver(name, config, 7276, PARSER_NAME_SAPM)


def new_signalfx_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for SignalFx receivers."""
    return GenericReceiver(name, config, 9943, PARSER_NAME_SIGNALFX)


def new_wavefront_receiver_parser(
    name: str, config: Mapping[Any, Any]
) -> ReceiverParser:
    """Build a parser for Wavefront receivers."""
    return GenericReceiver(name, config, 2003, PARSER_NAME_WAVEFRONT)


def new_zipkin_scribe_receiver_parser(
    name: str, config: Mapping[Any, Any]
) -> ReceiverParser:
    """Build a parser for Zipkin Scribe receivers."""
    return GenericReceiver(name, config, 9410, PARSER_NAME_ZIPKIN_SCRIBE)


def new_zipkin_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for Zipkin receivers."""
    return GenericReceiver(name, config, 9411, PARSER_NAME_ZIPKIN)


register("carbon", new_carbon_receiver_parser)
register("collectd", new_collectd_receiver_parser)
register("opencensus", new_opencensus_receiver_parser)
register("sapm", new_sapm_receiver_parser)
register("signalfx", new_signalfx_receiver_parser)
register("wavefront", new_wavefront_receiver_parser)
register("zipkin-scribe", new_zipkin_scribe_receiver_parser)
register("zipkin", new_zipkin_receiver_parser)