import random

from racesync.constants import SESSION_CODE_ALPHABET, SESSION_CODE_LENGTH
from racesync.session_codes import generate_session_code


def test_code_length_and_alphabet():
    for _ in range(200):
        code = generate_session_code()
        assert len(code) == SESSION_CODE_LENGTH == 6
        assert set(code) <= set(SESSION_CODE_ALPHABET)


def test_alphabet_excludes_ambiguous_glyphs():
    assert len(SESSION_CODE_ALPHABET) == 32
    for glyph in "0O1I":
        assert glyph not in SESSION_CODE_ALPHABET


def test_seeded_rng_is_reproducible():
    assert generate_session_code(random.Random(7)) == generate_session_code(random.Random(7))
