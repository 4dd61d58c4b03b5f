from __future__ import annotations

class FeedError(Exception):
    """Base class for feed failures. These are recorded, never raised to feed callers."""

class ConnectionFailure(FeedError):
    """Handshake failed or the receive loop ended; the connection is gone."""

class SendFailure(FeedError):
    """A single frame could not be written; the connection state is unchanged."""

class DecodeFailure(FeedError):
    """An inbound frame was not a valid update message."""

class StartIgnored(FeedError):
    """The connection was not up when the start grace delay elapsed."""
