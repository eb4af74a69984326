import pytest

from memcnf.clause import CNF, Clause
from memcnf.solver import SolveResult, dpll, format_solution, solve_cnf, to_dimacs


def _clause(positive=(), negative=(), bits=8):
    clause = Clause(bits)
    for p in positive:
        clause.positive.set_bit(p)
    for n in negative:
        clause.negative.set_bit(n)
    return clause


def _cnf(*clauses):
    cnf = CNF()
    first, *rest = clauses
    cnf.replace_first(first)
    for clause in rest:
        cnf.add(clause)
    return cnf


def _satisfies(model, clauses):
    return all(any(model[abs(l)] == (l > 0) for l in clause) for clause in clauses)


@pytest.mark.parametrize(
    "clauses, num_vars",
    [
        ([[1, 2], [-1, 3], [-2, -3]], 3),
        ([[1], [-1, 2], [-2, 3], [-3, 4]], 4),
        ([[1, -2], [2, -3], [3, -1], [1, 2, 3]], 3),
    ],
)
def test_dpll_model_satisfies_clauses(clauses, num_vars):
    model = dpll(clauses, num_vars)
    assert set(model) == set(range(1, num_vars + 1))
    assert _satisfies(model, clauses)


def test_dpll_unsatisfiable():
    assert dpll([[1], [-1]], 1) is None
    assert dpll([[1, 2], [-1, 2], [1, -2], [-1, -2]], 2) is None


def test_dpll_empty_clause_is_unsatisfiable():
    assert dpll([[1], []], 1) is None


def test_dpll_free_variables_default_false():
    assert dpll([], 2) == {1: False, 2: False}


@pytest.mark.parametrize("clauses", [[[0]], [[3]], [[-5, 1]]])
def test_dpll_rejects_out_of_range_literals(clauses):
    with pytest.raises(ValueError):
        dpll(clauses, 2)


def test_to_dimacs_layout():
    cnf = _cnf(_clause(positive=[1], negative=[2]))
    text = to_dimacs(cnf, {"a": {"position": 1}, "b": {"position": 2}})
    lines = text.splitlines()
    assert lines[0] == "КНФ в формате DIMACS:"
    assert lines[2] == "p cnf 2 1"
    assert lines[3] == "2 -3 0"
    assert lines[-2:] == ["2 -> a", "3 -> b"]


def test_to_dimacs_counts_all_clauses():
    cnf = _cnf(_clause(positive=[1]), _clause(negative=[1]), _clause(positive=[2]))
    text = to_dimacs(cnf, {"a": 1, "b": 2})
    assert "p cnf 2 3" in text.splitlines()
    assert sum(line.endswith(" 0") for line in text.splitlines()) == 3


def test_solve_cnf_satisfiable_model_meets_constraints():
    cnf = _cnf(_clause(positive=[1], negative=[2]))
    result = solve_cnf(cnf, {"root": 0, "a": 1, "b": 2})
    assert result.satisfiable
    assert result.total_variables == 3
    model = result.model
    assert model[1] or not model[2]
    assert model[1] or model[2]
    assert not model[1] or not model[2]
    assert result.used == (1, 2)
    assert result.dimacs == to_dimacs(cnf, {"root": 0, "a": 1, "b": 2})


def test_solve_cnf_unsatisfiable_with_not_all_constraint():
    cnf = _cnf(_clause(positive=[1]), _clause(positive=[2]))
    result = solve_cnf(cnf, {"a": 1, "b": 2})
    assert not result.satisfiable
    assert result.model == {}
    assert format_solution(result) == "Решение не существует\n"


def test_format_solution_lists_used_variables():
    cnf = _cnf(_clause(positive=[1], negative=[2]))
    result = solve_cnf(cnf, {"root": 0, "a": 1, "b": 2})
    lines = format_solution(result).splitlines()
    assert lines[0] == "Решение найдено:"
    assert lines[1:] == [f"x{i} = {int(result.model[i])}" for i in result.used]


def test_format_solution_from_constructed_result():
    result = SolveResult(True, 2, {0: False, 1: True}, (1,), "")
    assert format_solution(result) == "Решение найдено:\nx1 = 1\n"