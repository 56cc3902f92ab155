from __future__ import annotations

import logging
from typing import Callable, Iterable

from .errors import ErrorSink
from .model import CDATA, EXPRESSION, TEXT, Statement
from .writer import ClassWriter

logger = logging.getLogger(__name__)

# Message ids; expressions are referenced from generated code as ``this.<id>``.
EXCEPTION_IN_EXPRESSION = "EXCEPTION_IN_EXPRESSION"
MACRO_ALREADY_DEFINED = "MACRO_ALREADY_DEFINED"
STATEMENT_NOT_ALLOWED = "STATEMENT_NOT_ALLOWED"
UNKNOWN_STATEMENT = "UNKNOWN_STATEMENT"
MISSING_PARAMETER = "MISSING_PARAMETER"
MISSING_MAIN_MACRO = "MISSING_MAIN_MACRO"

MAIN_MACRO = "main"


class ReferenceProcessor:
    """
    A deliberately small statement processor: enough to turn text,
    expressions, macros and dependency declarations into a class body.

    Top-level statements may only be ``macro`` or ``dependency``; text and
    expressions are accepted only once a macro block has been entered.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[ClassWriter, Statement], None]] = {
            TEXT: self._text,
            CDATA: self._text,
            EXPRESSION: self._expression,
            "macro": self._macro,
            "dependency": self._dependency,
        }

    def __call__(self, out: ClassWriter, statement: Statement) -> None:
        handler = self._handlers.get(statement.name)
        if handler is None:
            out.log_warn(statement, UNKNOWN_STATEMENT, [statement.name])
            return
        handler(out, statement)

    def _require_output(self, out: ClassWriter, statement: Statement) -> bool:
        if out.is_output_ready():
            return True
        out.log_error(statement, STATEMENT_NOT_ALLOWED, [statement.name])
        return False

    def _text(self, out: ClassWriter, statement: Statement) -> None:
        if not self._require_output(out, statement):
            return
        text = statement.param_block
        if text:
            out.writeln("this.__$write(", out.stringify(text), ");")

    def _expression(self, out: ClassWriter, statement: Statement) -> None:
        if not self._require_output(out, statement):
            return
        if not statement.param_block.strip():
            out.log_error(statement, MISSING_PARAMETER, [statement.name])
            return
        out.track_line(statement.line_number)
        var = out.wrap_expression(statement.param_block, statement, "this." + EXCEPTION_IN_EXPRESSION)
        out.writeln(f"this.__$write({var});")

    def _macro(self, out: ClassWriter, statement: Statement) -> None:
        if out.is_output_ready():
            out.log_error(statement, STATEMENT_NOT_ALLOWED, [statement.name])
            return
        name = statement.param_block.strip()
        if not name:
            out.log_error(statement, MISSING_PARAMETER, [statement.name])
            return
        macro = out.get_macro(name)
        if macro.definition is not None:
            first: Statement = macro.definition
            out.log_error(statement, MACRO_ALREADY_DEFINED, [name, first.line_number])
            return
        macro.definition = statement

        block = f"macro_{name}"
        out.new_block(block, 2)
        with out.block(block):
            out.writeln(f"{block} : function () {{")
            with out.indented():
                out.writeln("try {")
                with out.indented():
                    out.process_content(statement.content)
                out.writeln("} catch (_ex) {")
                with out.indented():
                    out.writeln(f"this.$logError(this.EXCEPTION_IN_MACRO,[{out.stringify(name)},"
                                f"this['{out.config.framework_prefix}currentLineNumber']],_ex);")
                out.writeln("}")
            out.writeln("},")

    def _dependency(self, out: ClassWriter, statement: Statement) -> None:
        refs = [ref.strip() for ref in statement.param_block.split(",") if ref.strip()]
        if not refs:
            out.log_error(statement, MISSING_PARAMETER, [statement.name])
            return
        out.add_dependencies(refs)


# -----------------------------
# Whole-session helpers
# -----------------------------

def assemble_class(out: ClassWriter, classpath: str) -> str:
    """Join the dependency declaration and every macro block into a class definition."""
    lines = ["Aria.classDefinition({", f" $classpath: {out.stringify(classpath)},"]
    deps = out.get_dependencies()
    if deps:
        lines.append(f" {deps}")
    lines.append(" $prototype: {")
    body = "".join(out.get_block_content(f"macro_{name}") for name, _ in out.macros.items()
                   if out.has_block(f"macro_{name}"))
    lines.append(body.rstrip("\n"))
    lines.append(" }")
    lines.append("});")
    return "\n".join(ln for ln in lines if ln) + "\n"


def generate(
    statements: Iterable[Statement],
    classpath: str,
    process_errors: ErrorSink | None = None,
    callback: Callable[[ClassWriter], None] | None = None,
    **writer_kwargs,
) -> tuple[ClassWriter, str]:
    """Run one session with the reference processor. The text is ``""`` when errors were logged."""
    out = ClassWriter(ReferenceProcessor(), process_errors, **writer_kwargs)
    out.callback = callback
    out.process_content(statements)
    if MAIN_MACRO not in out.macros:
        out.log_warn(None, MISSING_MAIN_MACRO, [MAIN_MACRO])
    if out.errors:
        logger.info("generation of %s failed", classpath)
        return out, ""
    text = assemble_class(out, classpath)
    if out.callback is not None:
        out.callback(out)
    return out, text
