"""Errors raised while handling protocol messages.

Every error is recovered at the protocol handler and reported to the
originating connection as an ``error`` message; none of them is fatal.
"""
from __future__ import annotations


class ProtocolError(Exception):
    """Base class; ``message`` is what the client gets to see."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedMessage(ProtocolError):
    pass


class UnknownMessageType(ProtocolError):
    def __init__(self, msg_type: str):
        super().__init__(f"Unknown message type: {msg_type}")
        self.msg_type = msg_type


class SessionNotFound(ProtocolError):
    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class InvalidTransition(ProtocolError):
    pass


class NotBound(ProtocolError):
    def __init__(self, message: str = "Not connected to a session"):
        super().__init__(message)


class AlreadyBound(ProtocolError):
    def __init__(self, session_id: str):
        super().__init__(f"Already connected to session {session_id}")
        self.session_id = session_id


__all__ = [
    "ProtocolError",
    "MalformedMessage",
    "UnknownMessageType",
    "SessionNotFound",
    "InvalidTransition",
    "NotBound",
    "AlreadyBound",
]
