"""Session object that template statement processors write through.

One ClassWriter serves one generation session: it owns the output blocks,
the collected dependencies, the macro/view slots and the error flag. It is
not meant to be shared between sessions or threads.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable

from .codegen import BlockBuffer
from .config import DEFAULT_CONFIG, WriterConfig
from .errors import ErrorSink, LoggingErrorSink
from .model import Statement
from .naming import RNG, NameAllocator
from .registry import DependencyRegistry, MacroDescriptor, SymbolRegistry, ViewDescriptor

logger = logging.getLogger(__name__)

StatementProcessor = Callable[["ClassWriter", Statement], None]


class ClassWriter:
    def __init__(
        self,
        process_statement: StatementProcessor,
        process_errors: ErrorSink | None = None,
        config: WriterConfig | None = None,
        rng: RNG | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._process_statement = process_statement
        self._process_errors: ErrorSink = process_errors or LoggingErrorSink()

        self._out = BlockBuffer(self.config.indent_unit)
        self._names = NameAllocator(self.config.var_prefix, rng)
        self._dependencies = DependencyRegistry()
        self.macros: SymbolRegistry[MacroDescriptor] = SymbolRegistry(MacroDescriptor)
        self.views: SymbolRegistry[ViewDescriptor] = SymbolRegistry(ViewDescriptor)

        self.errors = False
        self.error_context: Any = None

        # generation context, filled in and read by the surrounding pipeline
        self.all_dependencies: bool | None = None
        self.template_param: Any = None
        self.parent_class_type = "JS"
        self.parent_class_name: str | None = None
        self.parent_classpath: str | None = None
        self.script_class_name: str | None = None
        self.script_classpath: str | None = None
        self.callback: Callable[["ClassWriter"], None] | None = None
        self.wlibs: dict[str, str] = {}
        self.debug = False
        self.tree: Any = None

    @property
    def indent_unit(self) -> str | None:
        return self._out.indent_unit

    @indent_unit.setter
    def indent_unit(self, value: str | None) -> None:
        self._out.indent_unit = value

    # -----------------------------
    # Dependencies & symbols
    # -----------------------------

    def add_dependency(self, dependency: str) -> None:
        self._dependencies.add(dependency)

    def add_dependencies(self, dependencies: Iterable[str]) -> None:
        self._dependencies.add_all(dependencies)

    def get_dependencies(self) -> str:
        """``$dependencies: ["a.B","c.D"],`` or an empty string."""
        return self._dependencies.render(self.stringify, self.config.dependencies_keyword)

    @property
    def dependencies(self) -> list[str]:
        return list(self._dependencies)

    def get_macro(self, macro_name: str) -> MacroDescriptor:
        return self.macros.get(macro_name)

    def get_view(self, view_base_name: str) -> ViewDescriptor:
        return self.views.get(view_base_name)

    # -----------------------------
    # Output blocks
    # -----------------------------

    def is_output_ready(self) -> bool:
        return self._out.is_output_ready()

    def new_block(self, block_name: str, indent: int = 0) -> None:
        self._out.new_block(block_name, indent)

    def enter_block(self, block_name: str) -> None:
        self._out.enter_block(block_name)

    def leave_block(self) -> None:
        self._out.leave_block()

    def get_block_content(self, block_name: str) -> str:
        return self._out.get_block_content(block_name)

    def has_block(self, block_name: str) -> bool:
        return self._out.has_block(block_name)

    def block(self, block_name: str):
        """``with writer.block(name):`` enters the block and leaves it on exit."""
        return self._out.entered(block_name)

    def indented(self):
        return self._out.indented()

    def increase_indent(self) -> None:
        self._out.increase_indent()

    def decrease_indent(self) -> None:
        self._out.decrease_indent()

    def write(self, *parts: str) -> None:
        self._out.write(*parts)

    def writeln(self, *parts: str) -> None:
        self._out.writeln(*parts)

    # -----------------------------
    # Generated-code helpers
    # -----------------------------

    def stringify(self, value: Any) -> str:
        """Render ``value`` as a JavaScript literal (strings come back double-quoted)."""
        return json.dumps(value)

    def new_var_name(self) -> str:
        return self._names.new_var_name()

    def wrap_expression(self, expr_str: str, statement: Statement, error_msg: str) -> str:
        """
        Emit a guarded ``eval`` of ``expr_str`` and return the name of the
        variable holding its result. The variable stays ``null`` when the
        evaluation throws; the failure is reported at runtime through
        ``this.$logError`` with the statement's line and name.
        """
        container = self.new_var_name()
        expr = self.stringify(expr_str)[1:-1]  # drop the surrounding quotes
        self.writeln(f"var {container} = null;")
        self.writeln("try {")
        with self.indented():
            self.writeln(f'eval( "{container}=({expr})" );')
        self.writeln("} catch (e) {")
        with self.indented():
            self.writeln(
                "this.$logError(", error_msg, ',["', expr, '",',
                str(statement.line_number), ",", self.stringify(statement.name), "], e);",
            )
        self.writeln("}")
        return container

    def track_line(self, line_number: int) -> None:
        if self.is_output_ready():
            self.writeln(f"this['{self.config.framework_prefix}currentLineNumber'] = {int(line_number)};")

    # -----------------------------
    # Statement processing
    # -----------------------------

    def process_content(self, content: Iterable[Statement]) -> None:
        for statement in content:
            self.process_statement(statement)

    def process_statement(self, statement: Statement) -> None:
        self._process_statement(self, statement)

    # -----------------------------
    # Error reporting
    # -----------------------------

    def log_error(self, statement: Statement | None, msg_id: str, msg_args: list[Any] | None = None) -> None:
        self.errors = True
        logger.debug("error %s reported", msg_id)
        self._process_errors(statement, msg_id, msg_args, self.error_context)

    def log_warn(self, statement: Statement | None, msg_id: str, msg_args: list[Any] | None = None) -> None:
        logger.debug("warning %s reported", msg_id)
        self._process_errors(statement, msg_id, msg_args, self.error_context)
