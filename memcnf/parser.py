"""Translation of JSON descriptions of pointer programs into CNF formulas."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Mapping, Union

from memcnf.boolvector import BoolVector
from memcnf.clause import CNF, Clause

NULL_MEMORY = "NULL"
_MEMORY_CELL = re.compile(r"N([0-9]+)")
_SEPARATOR = "-" * 34


class ParseError(Exception):
    """The document cannot be read or lacks the expected structure."""


@dataclass
class Element:
    """A program variable or memory cell and its CNF variable position."""

    kind: str
    position: int
    memory: str = NULL_MEMORY


@dataclass
class ParseResult:
    """Elements and formula built from a document, with any problems met on the way."""

    elements: dict[str, Element] = field(default_factory=dict)
    cnf: CNF = field(default_factory=CNF)
    errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> bool:
        return bool(self.errors)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _is_malloc(value: Any) -> bool:
    return isinstance(value, str) and value == "malloc"


def _discard(clause: Clause) -> None:
    clause.positive = BoolVector()
    clause.negative = BoolVector()
    clause.position = -1


class _Builder:
    """Walks the rows of a document, collecting elements and clauses."""

    def __init__(self) -> None:
        self.elements: dict[str, Element] = {}
        self.cnf = CNF()
        self.errors: list[str] = []
        self.max_bytes = 1
        self.position = 1
        self.memory_index = 0
        self.started = False

    def fail(self, message: str) -> None:
        self.errors.append(message)

    def define(self, name: str, kind: str, position: int) -> None:
        self.elements[name] = Element(kind, position)

    def set_positive(self, clause: Clause, position: int, var_type: str) -> None:
        self.max_bytes = clause.set_positive_bit(position, var_type, self.max_bytes)

    def set_negative(self, clause: Clause, position: int, var_type: str) -> None:
        self.max_bytes = clause.set_negative_bit(position, var_type, self.max_bytes)

    def emit_first_or_add(self, clause: Clause) -> None:
        if self.started:
            self.cnf.add(clause)
        else:
            self.cnf.replace_first(clause)
            self.started = True

    def run(self, rows: list[Any]) -> None:
        for row in rows:
            if not isinstance(row, dict) or "id" not in row:
                continue
            clause = Clause()
            clause.position = _to_int(row["id"])
            if self.statement(row, clause):
                continue
            if not self.started:
                self.cnf.replace_first(clause)
                self.started = True
            elif clause.position == -1:
                continue
            else:
                self.cnf.add(clause)
            if self.max_bytes > 1:
                self.cnf.resize_all(self.max_bytes)

    def statement(self, obj: dict[str, Any], clause: Clause) -> bool:
        """Process one statement; True if it assigned null directly."""
        statement_id = _to_int(obj["id"])
        clause.position = statement_id
        if "variable" in obj:
            name = _to_str(obj["variable"])
            root = name
            if name not in self.elements:
                self.define(name, "Variable", self.position)
                self.position += 1
            if "value" in obj:
                value = obj["value"]
                position = self.elements[name].position
                if value is None:
                    _discard(clause)
                    return True
                if _is_malloc(value):
                    self.set_negative(clause, position, "Variable")
                    self.set_positive(clause, self.position, "mem_var")
                    self.malloc(name, statement_id, root)
                elif isinstance(value, dict):
                    self.set_negative(clause, position, "Variable")
                    self.nested_value(value, clause)
            elif "field" in obj:
                self.structure_field(obj["field"], name, clause, statement_id, root)
        elif "operation" in obj:
            operation = obj["operation"]
            self.operation(operation if isinstance(operation, dict) else {}, clause)
        return False

    def body(self, value: Any, clause: Clause) -> None:
        if isinstance(value, dict):
            if "id" in value:
                self.statement(value, clause)
        elif isinstance(value, list):
            for item in value:
                self.body(item, clause)

    def operation(self, operation: dict[str, Any], clause: Clause) -> None:
        if "op" not in operation:
            self.fail("operation without 'op'")
            return
        for key in ("branch true", "branch false"):
            branch = operation.get(key)
            if isinstance(branch, dict) and "body" in branch:
                self.body(branch["body"], clause)

    def step(self, name: str, direction: str) -> str:
        """Move from a memory cell to its left or right child cell."""
        match = _MEMORY_CELL.fullmatch(name)
        if match is None:
            self.fail(f"{name!r} is not a memory cell")
            return name
        number = int(match.group(1))
        if direction == "left":
            return f"N{number + 1}"
        if direction == "right":
            return f"N{number + 2}"
        return name

    def structure_field(
        self, field_value: Any, name: str, clause: Clause, clause_id: int, root: str
    ) -> None:
        while True:
            if not isinstance(field_value, dict):
                self.fail("field is not an object")
                return
            direction = field_value.get("f")
            if "f" in field_value and isinstance(direction, str):
                if name not in self.elements:
                    self.fail(f"unknown element {name!r}")
                    return
                name = self.step(self.elements[name].memory, direction)
            if "value" in field_value:
                self.field_assignment(field_value["value"], name, clause, clause_id, root)
                return
            if "op" not in field_value:
                return
            field_value = field_value["op"]

    def field_assignment(
        self, value: Any, name: str, clause: Clause, clause_id: int, root: str
    ) -> None:
        if name not in self.elements:
            self.fail(f"unknown element {name!r}")
            return
        self.set_negative(clause, self.elements[name].position, "mem_var")
        if value is None:
            _discard(clause)
        elif _is_malloc(value):
            self.set_positive(clause, self.position, "mem_var")
            self.malloc(name, clause_id, root)
        elif isinstance(value, dict):
            self.nested_value(value, clause)

    def nested_value(self, value: dict[str, Any], clause: Clause) -> None:
        if "variable" not in value:
            self.fail("value without 'variable'")
            return
        target = _to_str(value["variable"])
        if target not in self.elements:
            self.fail(f"unknown element {target!r}")
            return
        memory = self.elements[target].memory
        if memory == NULL_MEMORY:
            if "field" in value:
                self.fail(f"field of unallocated {target!r}")
                return
            self.set_positive(clause, self.elements[target].position, "variable")
            return
        if "field" in value:
            self.value_field(value["field"], target, clause)
        elif memory in self.elements:
            self.set_positive(clause, self.elements[memory].position, "variable")
        else:
            self.fail(f"unknown element {memory!r}")

    def value_field(self, field_value: Any, name: str, clause: Clause) -> None:
        if not isinstance(field_value, dict):
            self.fail("field is not an object")
            return
        if "f" in field_value:
            if name not in self.elements:
                self.fail(f"unknown element {name!r}")
                return
            name = self.step(self.elements[name].memory, _to_str(field_value["f"]))
        if name in self.elements:
            # Growth made here does not raise the shared byte maximum.
            clause.set_positive_bit(self.elements[name].position, "mem_var", self.max_bytes)
        else:
            self.fail(f"unknown element {name!r}")

    def malloc(self, name: str, clause_id: int, root: str) -> None:
        cell = f"N{self.memory_index}"
        self.elements[name].memory = cell
        self.define(cell, "mem_var", self.position)
        parent_id = self.position
        parent_var = self.elements[name].position
        for existing in self.cnf:
            links_root = existing.positive.get_bit(0) or existing.negative.get_bit(0)
            if (
                links_root
                and existing.positive.get_bit(parent_var)
                and existing.negative.get_bit(parent_id)
            ):
                self.cnf.remove(existing)
                break

        self.memory_index += 1
        self.position += 1
        root_id = self.elements[root].position
        for _ in range(2):
            self.define(f"N{self.memory_index}", "mem_var", self.position)
            child = Clause()
            child.position = clause_id
            self.set_negative(child, parent_id, "mem_var")
            self.set_positive(child, self.position, "mem_var")
            back = Clause()
            self.set_negative(back, self.position, "mem_var")
            self.set_positive(back, root_id, "variable")
            self.emit_first_or_add(child)
            self.cnf.add(back)
            self.memory_index += 1
            self.position += 1


def parse_document(document: Any) -> ParseResult:
    """Build elements and a CNF formula from a decoded JSON document."""
    if not isinstance(document, dict):
        raise ParseError("Invalid JSON structure")
    code = document.get("code")
    if not isinstance(code, dict):
        raise ParseError("Missing 'code' object")
    rows = code.get("rows")
    if not isinstance(rows, list):
        raise ParseError("Missing 'rows' array")
    builder = _Builder()
    builder.run(rows)
    return ParseResult(builder.elements, builder.cnf, builder.errors)


def parse_json_file(path: Union[str, "PathLike[str]"]) -> ParseResult:
    """Read a JSON file and build its elements and CNF formula."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(f"Failed to open file: {path}") from exc
    try:
        document = json.loads(raw)
    except ValueError as exc:
        raise ParseError(f"JSON parse error: {exc}") from exc
    return parse_document(document)


def format_elements(elements: Mapping[str, Element]) -> str:
    """Describe every element between separator lines."""
    lines = [_SEPARATOR]
    for name, element in elements.items():
        lines.extend(
            [
                f"Name: {name}",
                f"  Type: {element.kind}",
                f"  Position: {element.position}",
                f"  Memory: {element.memory}",
                _SEPARATOR,
            ]
        )
    return "\n".join(lines) + "\n"