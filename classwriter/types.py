from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from .model import Statement


class StatementSpec(TypedDict):
    name: str
    line_number: NotRequired[int]
    param_block: NotRequired[str]
    content: NotRequired[list["StatementSpec"]]
    properties: NotRequired[dict[str, Any]]


def mk_statement(sd: StatementSpec) -> Statement:
    return Statement(
        name=sd["name"],
        line_number=int(sd.get("line_number", 0)),
        param_block=sd.get("param_block", ""),
        content=[mk_statement(child) for child in sd.get("content", [])],
        properties=dict(sd.get("properties", {})),
    )


def mk_statements(sds: list[StatementSpec]) -> list[Statement]:
    return [mk_statement(sd) for sd in sds]
