"""Parsers for receivers that expose one port per configured protocol."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .receivers import (
    ReceiverParser,
    ServicePort,
    port_name,
    register,
    single_port_from_config_endpoint,
)

_log = logging.getLogger("receivers")

PARSER_NAME_JAEGER = "__jaeger"
PARSER_NAME_OTLP = "__otlp"

PROTOCOL_TCP = "TCP"
PROTOCOL_UDP = "UDP"

DEFAULT_GRPC_PORT = 14250
DEFAULT_THRIFT_HTTP_PORT = 14268
DEFAULT_THRIFT_COMPACT_PORT = 6831
DEFAULT_THRIFT_BINARY_PORT = 6832

DEFAULT_OTLP_GRPC_PORT = 4317
DEFAULT_OTLP_HTTP_PORT = 55681


@dataclass(frozen=True)
class _JaegerProtocol:
    name: str
    default_port: int
    transport: str


_JAEGER_PROTOCOLS = (
    _JaegerProtocol("grpc", DEFAULT_GRPC_PORT, PROTOCOL_TCP),
    _JaegerProtocol("thrift_http", DEFAULT_THRIFT_HTTP_PORT, PROTOCOL_TCP),
    _JaegerProtocol("thrift_compact", DEFAULT_THRIFT_COMPACT_PORT, PROTOCOL_UDP),
    _JaegerProtocol("thrift_binary", DEFAULT_THRIFT_BINARY_PORT, PROTOCOL_UDP),
)

_OTLP_PROTOCOLS = (
    ("grpc", DEFAULT_OTLP_GRPC_PORT),
    ("http", DEFAULT_OTLP_HTTP_PORT),
)


def _protocols_of(config: Mapping[Any, Any]) -> Mapping[Any, Any]:
    protocols = config.get("protocols")
    return protocols if isinstance(protocols, Mapping) else {}


def _configured_port(name: str, settings: Any) -> ServicePort | None:
    if isinstance(settings, Mapping):
        return single_port_from_config_endpoint(name, settings)
    return None


class JaegerReceiverParser(ReceiverParser):
    """Works out the ports of a Jaeger receiver, one per enabled protocol."""

    def __init__(self, name: str, config: Mapping[Any, Any]) -> None:
        self.name = name
        self.config = _protocols_of(config)

    def ports(self) -> list[ServicePort]:
        result = []
        for protocol in _JAEGER_PROTOCOLS:
            if protocol.name not in self.config:
                continue
            name_with_protocol = f"{self.name}-{protocol.name}"
            port = _configured_port(name_with_protocol, self.config[protocol.name])
            if port is None:
                port = ServicePort(
                    name=port_name(name_with_protocol, protocol.default_port),
                    port=protocol.default_port,
                )
            port.protocol = protocol.transport
            result.append(port)
        return result

    def parser_name(self) -> str:
        return PARSER_NAME_JAEGER


class OTLPReceiverParser(ReceiverParser):
    """Works out the ports of an OTLP receiver, one per enabled protocol."""

    def __init__(self, name: str, config: Mapping[Any, Any]) -> None:
        self.name = name
        self.config = _protocols_of(config)

    def ports(self) -> list[ServicePort]:
        result = []
        for protocol, default_port in _OTLP_PROTOCOLS:
            if protocol not in self.config:
                continue
            name_with_protocol = f"{self.name}-{protocol}"
            port = _configured_port(name_with_protocol, self.config[protocol])
            if port is None:
                port = ServicePort(
                    name=port_name(name_with_protocol, default_port),
                    port=default_port,
                    target_port=default_port,
                )
            result.append(port)
        return result

    def parser_name(self) -> str:
        return PARSER_NAME_OTLP


def new_jaeger_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for Jaeger receivers."""
    return JaegerReceiverParser(name, config)


def new_otlp_receiver_parser(name: str, config: Mapping[Any, Any]) -> ReceiverParser:
    """Build a parser for OTLP receivers."""
    return OTLPReceiverParser(name, config)


register("jaeger", new_jaeger_receiver_parser)
register("otlp", new_otlp_receiver_parser)