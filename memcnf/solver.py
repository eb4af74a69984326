"""DIMACS rendering and satisfiability checking for clause formulas."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from memcnf.clause import CNF, Clause


def _position_of(value: object) -> int:
    """Read a variable position from an element description."""
    if isinstance(value, int):
        return value
    if isinstance(value, Mapping):
        return int(value["position"])
    return int(getattr(value, "position"))


def _set_bits(clause: Clause) -> tuple[list[int], list[int]]:
    positive = [i for i in range(len(clause.positive)) if clause.positive.get_bit(i)]
    negative = [i for i in range(len(clause.negative)) if clause.negative.get_bit(i)]
    return positive, negative


@dataclass(frozen=True)
class SolveResult:
    """Outcome of solving a formula.

    ``model`` maps each zero-based variable position to its value and is
    empty when the formula has no solution.  ``used`` lists the positions
    that occur in at least one clause of the formula.
    """

    satisfiable: bool
    total_variables: int
    model: dict[int, bool] = field(default_factory=dict)
    used: tuple[int, ...] = ()
    dimacs: str = ""


def _propagate(clauses: list[tuple[int, ...]], assignment: dict[int, bool]) -> bool:
    """Apply unit propagation in place; return False on a conflict."""
    changed = True
    while changed:
        changed = False
        for clause in clauses:
            unassigned = []
            satisfied = False
            for literal in clause:
                var = abs(literal)
                if var in assignment:
                    if assignment[var] == (literal > 0):
                        satisfied = True
                        break
                else:
                    unassigned.append(literal)
            if satisfied:
                continue
            if not unassigned:
                return False
            if len(unassigned) == 1:
                literal = unassigned[0]
                assignment[abs(literal)] = literal > 0
                changed = True
    return True


def _open_variable(clauses: list[tuple[int, ...]], assignment: dict[int, bool]) -> int | None:
    """First unassigned variable of a clause that is not yet satisfied."""
    for clause in clauses:
        if any(abs(l) in assignment and assignment[abs(l)] == (l > 0) for l in clause):
            continue
        for literal in clause:
            if abs(literal) not in assignment:
                return abs(literal)
    return None


def dpll(clauses: Iterable[Iterable[int]], num_vars: int) -> dict[int, bool] | None:
    """Find a satisfying assignment for DIMACS-style clauses.

    Variables are numbered from 1 to ``num_vars``; a negative literal is a
    negated variable.  Decisions try False first and variables left free
    are set to False.  Returns None when no assignment exists.
    """
    if num_vars < 0:
        raise ValueError("variable count must not be negative")
    prepared: list[tuple[int, ...]] = []
    for clause in clauses:
        literals = tuple(dict.fromkeys(clause))
        for literal in literals:
            if literal == 0 or abs(literal) > num_vars:
                raise ValueError(f"literal {literal} out of range")
        if not literals:
            return None
        prepared.append(literals)

    stack: list[dict[int, bool]] = [{}]
    while stack:
        assignment = stack.pop()
        if not _propagate(prepared, assignment):
            continue
        var = _open_variable(prepared, assignment)
        if var is None:
            return {v: assignment.get(v, False) for v in range(1, num_vars + 1)}
        stack.append({**assignment, var: True})
        stack.append({**assignment, var: False})
    return None


def to_dimacs(cnf: CNF, elements: Mapping[str, object]) -> str:
    """Render the formula in DIMACS form followed by the variable names."""
    names: dict[int, str] = {}
    for name, value in elements.items():
        names[_position_of(value)] = name

    var_count = len(elements)
    lines = [
        "КНФ в формате DIMACS:",
        "c Сгенерированная КНФ-формула",
        f"p cnf {var_count} {len(cnf)}",
    ]
    for clause in cnf:
        positive, negative = _set_bits(clause)
        parts = [f"{i + 1} " for i in positive] + [f"-{i + 1} " for i in negative]
        lines.append("".join(parts) + "0")

    lines.append("")
    lines.append("Соответствие переменных:")
    for i in range(1, var_count + 1):
        if i in names:
            lines.append(f"{i + 1} -> {names[i]}")
        else:
            lines.append(f"{i + 1} -> N{i - var_count}")
    return "\n".join(lines) + "\n"


def solve_cnf(cnf: CNF, elements: Mapping[str, object]) -> SolveResult:
    """Solve the formula together with its at-least-one and not-all constraints."""
    dimacs = to_dimacs(cnf, elements)
    max_position = max((_position_of(v) for v in elements.values()), default=0)
    total = max(max_position, 0) + 1

    clauses: list[list[int]] = []
    used: set[int] = set()
    for clause in cnf:
        positive, negative = _set_bits(clause)
        used.update(positive)
        used.update(negative)
        literals = [i + 1 for i in positive if i < total]
        literals += [-(i + 1) for i in negative if i < total]
        if literals:
            clauses.append(literals)

    rest = range(1, total)
    if rest:
        clauses.append([i + 1 for i in rest])
        clauses.append([-(i + 1) for i in rest])

    model = dpll(clauses, total)
    used_positions = tuple(sorted(i for i in used if i < total))
    if model is None:
        return SolveResult(False, total, {}, used_positions, dimacs)
    values = {i: model[i + 1] for i in range(total)}
    return SolveResult(True, total, values, used_positions, dimacs)


def format_solution(result: SolveResult) -> str:
    """Describe the solution as printed after solving."""
    if not result.satisfiable:
        return "Решение не существует\n"
    lines = ["Решение найдено:"]
    lines.extend(f"x{i} = {int(result.model[i])}" for i in result.used)
    return "\n".join(lines) + "\n"