from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Statement nodes as handed over by the template parser.

The writer only ever reads ``line_number`` and ``name``; the rest is carried
for statement processors.
"""


@dataclass
class Statement:
    name: str
    line_number: int = 0
    param_block: str = ""
    content: list[Statement] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def is_container(self) -> bool:
        return bool(self.content)


# Names the parser gives to non-directive nodes.
TEXT = "#TEXT#"
CDATA = "#CDATA#"
EXPRESSION = "#EXPRESSION#"
