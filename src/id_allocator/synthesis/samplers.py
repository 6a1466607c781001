import random
from typing import Sequence

from ..analysis.data_classes import NamePool
from ..config import SynthesisSettings, DEFAULT_SYNTHESIS


def pick(rng: random.Random, pool: Sequence[str]) -> str:
    if not pool:
        return ""
    return rng.choice(pool)


def random_digits(rng: random.Random, n: int) -> str:
    return "".join(rng.choice("0123456789") for _ in range(n))


def generate_name(
    pool: NamePool,
    rng: random.Random,
    settings: SynthesisSettings = DEFAULT_SYNTHESIS,
) -> str:
    if not pool.given_names:
        return settings.placeholder_name
    given = rng.choice(pool.given_names)
    if pool.surnames and rng.random() < settings.surname_probability:
        return f"{rng.choice(pool.surnames)} {given}"
    return given


def generate_phone(rng: random.Random, settings: SynthesisSettings = DEFAULT_SYNTHESIS) -> str:
    return rng.choice(settings.phone_leading_digits) + random_digits(rng, settings.phone_length - 1)


def generate_secondary_id(rng: random.Random, settings: SynthesisSettings = DEFAULT_SYNTHESIS) -> str:
    return settings.secondary_id_prefix + random_digits(rng, settings.secondary_id_digits)
