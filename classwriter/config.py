from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WriterConfig:
    """
    Knobs for the text a ClassWriter produces.
    Everything here ends up verbatim in generated code.
    """
    indent_unit: str | None = " "  # None or "" disables indentation
    var_prefix: str = "__v_"
    framework_prefix: str = "aria:"
    dependencies_keyword: str = "$dependencies"


DEFAULT_CONFIG = WriterConfig()
