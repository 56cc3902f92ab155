"""Simple profiling of block output, expression wrapping and dependency collection."""

from __future__ import annotations

import timeit
import tracemalloc

from classwriter import ClassWriter, Statement


def _writer() -> ClassWriter:
    out = ClassWriter(lambda w, s: None)
    out.new_block("main", 1)
    out.enter_block("main")
    return out


def main() -> None:
    out: ClassWriter = _writer()

    def _writeln() -> None:
        out.writeln("this.__$write(", '"x"', ");")

    duration: float = timeit.timeit(_writeln, number=10000)
    print(f"writeln: {duration:.4f}s/10000")

    stmt = Statement("#EXPRESSION#", line_number=1)
    wrap: float = timeit.timeit(lambda: out.wrap_expression("data.a + data.b", stmt, "this.ERR"), number=1000)
    print(f"wrap_expression(): {wrap:.4f}s/1000")

    def _deps() -> None:
        out.add_dependencies([f"app.mod{i % 50}" for i in range(200)])

    deps: float = timeit.timeit(_deps, number=1000)
    print(f"add_dependencies (200 refs, 50 unique): {deps:.4f}s/1000")

    tracemalloc.start()
    big: ClassWriter = _writer()
    for i in range(5000):
        big.track_line(i)
        big.wrap_expression("x", stmt, "this.ERR")
    text: str = big.get_block_content("main")
    current: int
    peak: int
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    print(f"5000 wrapped expressions ({len(text)} chars): current={current} bytes peak={peak} bytes")


if __name__ == "__main__":
    main()
