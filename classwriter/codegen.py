from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .errors import NoActiveBlockError

logger = logging.getLogger(__name__)


@dataclass
class OutputBlock:
    indent_level: int = 0
    fragments: list[str] = field(default_factory=list)

    def render(self) -> str:
        return "".join(self.fragments)


class BlockBuffer:
    """
    Named output blocks with a navigation stack.

    Text always goes to the block on top of the stack. Each block keeps its
    own indent level, so leaving a nested block and coming back to an outer
    one restores the outer block's indentation.
    """

    def __init__(self, indent_unit: str | None = " ") -> None:
        self.indent_unit = indent_unit  # None or "" disables indentation
        self._blocks: dict[str, OutputBlock] = {}
        self._stack: list[OutputBlock | None] = []
        self._current: OutputBlock | None = None
        self._curindent = ""

    # -------------------------------- blocks ---------------------------- #

    def new_block(self, name: str, indent: int = 0) -> None:
        self._blocks[name] = OutputBlock(indent_level=indent)
        logger.debug("new block %r (indent %d)", name, indent)

    def enter_block(self, name: str) -> None:
        self._stack.append(self._current)
        self._current = self._blocks.get(name)
        if self._current is None:
            logger.debug("entered unknown block %r, no output block is active", name)
        elif self.indent_unit:
            self._update_indent()

    def leave_block(self) -> None:
        self._current = self._stack.pop() if self._stack else None
        if self.indent_unit and self._current is not None:
            self._update_indent()

    def has_block(self, name: str) -> bool:
        return name in self._blocks

    def block_names(self) -> list[str]:
        return list(self._blocks)

    def get_block_content(self, name: str) -> str:
        return self._blocks[name].render()

    def is_output_ready(self) -> bool:
        return self._current is not None

    @property
    def depth(self) -> int:
        return len(self._stack)

    # -------------------------------- output ---------------------------- #

    def write(self, *parts: str) -> None:
        self._active().fragments.extend(parts)

    def writeln(self, *parts: str) -> None:
        out = self._active().fragments
        if self.indent_unit and self._curindent:
            out.append(self._curindent)
        out.extend(parts)
        out.append("\n")

    def increase_indent(self) -> None:
        if self.indent_unit:
            self._active().indent_level += 1
            self._update_indent()

    def decrease_indent(self) -> None:
        if self.indent_unit:
            self._active().indent_level -= 1
            self._update_indent()

    def indented(self) -> "_Indented":
        return _Indented(self)

    def entered(self, name: str) -> "_Entered":
        return _Entered(self, name)

    # ------------------------------- helpers ---------------------------- #

    def _active(self) -> OutputBlock:
        if self._current is None:
            raise NoActiveBlockError("No output block is active")
        return self._current

    def _update_indent(self) -> None:
        self._curindent = (self.indent_unit or "") * self._active().indent_level


class _Indented:
    def __init__(self, buf: BlockBuffer) -> None:
        self.buf = buf

    def __enter__(self) -> None:
        self.buf.increase_indent()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.buf.decrease_indent()


class _Entered:
    def __init__(self, buf: BlockBuffer, name: str) -> None:
        self.buf = buf
        self.name = name

    def __enter__(self) -> None:
        self.buf.enter_block(self.name)

    def __exit__(self, exc_type, exc, tb) -> None:
        self.buf.leave_block()
