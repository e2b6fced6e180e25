# Session codes avoid glyphs that are easy to misread (0/O, 1/I).
SESSION_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
SESSION_CODE_LENGTH = 6

# Shown in place of a participant initial when no display name was given.
DEFAULT_INITIAL = "?"

# Message types a client may send.
CLIENT_MESSAGE_TYPES = {
    "create_session",
    "join_session",
    "start_stopwatch",
    "stop_stopwatch",
    "reset_stopwatch",
    "lap_stopwatch",
    "sync_state",
}

# Message types only the server emits.
SERVER_MESSAGE_TYPES = {
    "connected",
    "user_joined",
    "user_left",
    "error",
}

__all__ = [
    "SESSION_CODE_ALPHABET",
    "SESSION_CODE_LENGTH",
    "DEFAULT_INITIAL",
    "CLIENT_MESSAGE_TYPES",
    "SERVER_MESSAGE_TYPES",
]
