import random
import logging

from ..errors import ChecksumInvalidInput, RangeExhausted

logger = logging.getLogger(__name__)

"""
Verhoeff Check Digits
=====================

12-digit identifiers carry a Verhoeff check digit in the last position.
Digits are processed least-significant first against the dihedral group
multiplication table ``_D`` and the position permutation table ``_P``.

Leading digits are drawn from 2-9 so generated identifiers never start
with 0 or 1.
"""

CHECKSUM_ID_LENGTH = 12
BASE_LENGTH = CHECKSUM_ID_LENGTH - 1
LEADING_DIGITS = "23456789"
MAX_INVALID_ATTEMPTS = 1_000

_D = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

_P = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

_INV = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)


def _digits(value: str, length: int) -> list[int]:
    if not isinstance(value, str) or len(value) != length or not value.isdigit():
        raise ChecksumInvalidInput(value, length)
    return [int(ch) for ch in reversed(value)]


def _accumulate(digits: list[int], offset: int) -> int:
    c = 0
    for i, digit in enumerate(digits):
        c = _D[c][_P[(i + offset) % 8][digit]]
    return c


def compute_check_digit(base: str) -> int:
    return _INV[_accumulate(_digits(base, BASE_LENGTH), offset=1)]


def validate(full: str) -> bool:
    return _accumulate(_digits(full, CHECKSUM_ID_LENGTH), offset=0) == 0


def _random_digits(rng: random.Random, n: int) -> str:
    return "".join(rng.choice("0123456789") for _ in range(n))


def generate_valid(rng: random.Random | None = None) -> str:
    rng = rng or random.SystemRandom()
    base = rng.choice(LEADING_DIGITS) + _random_digits(rng, BASE_LENGTH - 1)
    return f"{base}{compute_check_digit(base)}"


def generate_invalid(
    rng: random.Random | None = None,
    max_attempts: int = MAX_INVALID_ATTEMPTS,
) -> str:
    rng = rng or random.SystemRandom()
    for _ in range(max_attempts):
        candidate = rng.choice(LEADING_DIGITS) + _random_digits(rng, CHECKSUM_ID_LENGTH - 1)
        if not validate(candidate):
            return candidate
    raise RangeExhausted(
        f"No checksum-invalid candidate found in {max_attempts} attempts",
        attempts=max_attempts,
    )


def generate_valid_batch(count: int, rng: random.Random | None = None) -> list[str]:
    """Unreserved checksum-valid values. Use the reservation coordinator for anything that gets issued."""
    return [generate_valid(rng) for _ in range(count)]


def generate_invalid_batch(count: int, rng: random.Random | None = None) -> list[str]:
    values = [generate_invalid(rng) for _ in range(count)]
    logger.debug(f"Generated {len(values)} checksum-invalid values")
    return values
