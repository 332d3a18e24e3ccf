"""Domain protocols (ports).

Usage:
    from routesync.domain.protocols import LoggerProtocol, NullLogger
"""

from routesync.domain.protocols.gateway_protocol import (
    AccessToken,
    AuthenticatorProtocol,
    GatewayClientProtocol,
    SyncReport,
)
from routesync.domain.protocols.logger_protocol import LoggerProtocol, NullLogger
from routesync.domain.protocols.pattern_decoder_protocol import PatternDecoderProtocol

__all__ = [
    "AccessToken",
    "AuthenticatorProtocol",
    "GatewayClientProtocol",
    "LoggerProtocol",
    "NullLogger",
    "PatternDecoderProtocol",
    "SyncReport",
]
