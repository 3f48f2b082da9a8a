"""Tolerant parsing of workflow text."""

from .parser import ParseOptions, ParseOutcome, json_parse, loads_strict, parse_json_text
from .repair import RepairResult, repair_json_text
from .scanner import JSONC, OBJECT_LITERAL, STRICT, Dialect
from .tree import (
    JsonNode,
    NodeType,
    ParseTree,
    SyntaxProblem,
    find_node_at_location,
    node_value,
    parse_tree,
)

__all__ = [
    # Parser
    "ParseOptions",
    "ParseOutcome",
    "parse_json_text",
    "json_parse",
    "loads_strict",
    # Repair
    "RepairResult",
    "repair_json_text",
    # Syntax tree
    "Dialect",
    "STRICT",
    "JSONC",
    "OBJECT_LITERAL",
    "JsonNode",
    "NodeType",
    "ParseTree",
    "SyntaxProblem",
    "parse_tree",
    "node_value",
    "find_node_at_location",
]
