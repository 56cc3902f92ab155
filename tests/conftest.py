import pytest

from classwriter import ClassWriter, CollectingErrorSink, Statement


class FixedRNG:
    def __init__(self, value: int = 3) -> None:
        self.value = value

    def randint(self, a: int, b: int) -> int:
        return self.value


def _no_op(out: ClassWriter, statement: Statement) -> None:
    pass


@pytest.fixture
def sink() -> CollectingErrorSink:
    return CollectingErrorSink()


@pytest.fixture
def fixed_rng() -> FixedRNG:
    return FixedRNG()


@pytest.fixture
def writer(sink: CollectingErrorSink, fixed_rng: FixedRNG) -> ClassWriter:
    return ClassWriter(_no_op, sink, rng=fixed_rng)
