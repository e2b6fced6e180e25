"""Short, human-friendly session codes."""
from __future__ import annotations

import random
from typing import Optional

from .constants import SESSION_CODE_ALPHABET, SESSION_CODE_LENGTH

_rng = random.SystemRandom()


def generate_session_code(rng: Optional[random.Random] = None) -> str:
    """Return a random code of ``SESSION_CODE_LENGTH`` unambiguous characters.

    Uniqueness is not checked here; the session store retries on collision.
    """
    chooser = rng or _rng
    return "".join(chooser.choice(SESSION_CODE_ALPHABET) for _ in range(SESSION_CODE_LENGTH))


__all__ = ["generate_session_code"]
