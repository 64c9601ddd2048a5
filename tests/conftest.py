import random
from typing import Callable
import pytest


@pytest.fixture
def randfunc() -> Callable[[int], bytes]:
    """A deterministic source of random bytes."""
    return random.Random(0x5EED).randbytes


@pytest.fixture
def zero_randfunc() -> Callable[[int], bytes]:
    """A source that returns only zero bytes."""
    return lambda n: bytes(n)
