import random
from typing import Callable

from . import checksum
from .classes import IDClass, spec_for

CandidateGenerator = Callable[[], str]


class RangeAllocator:
    """
    Uniform random draws over an inclusive integer range.

    Draws are independent and never deduplicated; uniqueness is the
    reservation coordinator's job, not the allocator's.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.SystemRandom()

    def draw(self, min_value: int, max_value: int) -> int:
        if min_value > max_value:
            raise ValueError(f"Empty range [{min_value}, {max_value}]")
        # randint rejection-samples over getrandbits, so wide ranges carry no modulo bias
        return self._rng.randint(min_value, max_value)

    def generator_for(self, id_class: IDClass) -> CandidateGenerator:
        spec = spec_for(id_class)
        if spec.is_checksum:
            return lambda: checksum.generate_valid(self._rng)
        assert spec.min_value is not None and spec.max_value is not None
        lo, hi = spec.min_value, spec.max_value
        return lambda: str(self.draw(lo, hi))


def draw(min_value: int, max_value: int, rng: random.Random | None = None) -> int:
    return RangeAllocator(rng).draw(min_value, max_value)


def generator_for(id_class: IDClass, rng: random.Random | None = None) -> CandidateGenerator:
    return RangeAllocator(rng).generator_for(id_class)
