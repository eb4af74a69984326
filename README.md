# memcnf

`memcnf` reads a JSON description of a program's variables and memory
operations (assignments, `malloc` calls, `NULL` stores, structure fields and
branches) and encodes the links between variables and allocated memory cells
as a formula in conjunctive normal form. It prints the formula in DIMACS form
and checks it with a small built-in DPLL SAT solver.

## Installation

```
pip install .
```

No third-party libraries are needed at run time.

## Command line

```
memcnf program.json
```

The command:

1. prints the collected variables and memory cells (`Name`, `Type`,
   `Position`, `Memory`) to standard error;
2. prints the generated clauses, each as its positive and negative bit
   vectors;
3. prints two fixed two-clause sample formulas;
4. prints the formula in DIMACS format (`p cnf ...` header, one line per
   clause ending in `0`) followed by the mapping of variable numbers to names;
5. prints either a satisfying assignment (`xN = 0|1` for every variable that
   occurs in a clause) or a message that no solution exists.

Headings and result messages in the DIMACS and solution output are in
Russian. The exit status is 1 when no file is given, when the file cannot be
read or lacks the expected structure, or when a problem was met while
processing the rows; otherwise it is 0.

## Input format

The input is a JSON object with a `code` object holding a `rows` array. Each
row has an `id` and either a `variable` (with a `value` or a `field`) or an
`operation` with `op` and optional `branch true` / `branch false` objects
whose `body` holds further rows:

```json
{
  "code": {
    "rows": [
      {"id": 1, "variable": "p", "value": "malloc"},
      {"id": 2, "variable": "q", "value": {"variable": "p"}},
      {"id": 3, "variable": "p", "field": {"f": "left", "value": null}}
    ]
  }
}
```

A `value` may be `"malloc"`, `null`, or an object naming another `variable`
(optionally with a `field`). A `field` object names a direction in `f`
(`"left"` or `"right"`) and either a `value` or a nested `op` field.

## Library use

```python
from memcnf.parser import parse_json_file, format_elements
from memcnf.solver import solve_cnf, to_dimacs, format_solution

result = parse_json_file("program.json")   # raises ParseError on bad input
print(format_elements(result.elements))
print(to_dimacs(result.cnf, result.elements))
print(format_solution(solve_cnf(result.cnf, result.elements)))
```

- `memcnf.parser.parse_document` does the same for an already decoded JSON
  object. Both return a `ParseResult` with `elements` (name to `Element`),
  `cnf`, and `errors`; its `error` property is true when any problem was met.
- `memcnf.solver.solve_cnf` returns a `SolveResult` with `satisfiable`,
  `total_variables`, `model`, `used` and the `dimacs` text.
- `memcnf.solver.dpll(clauses, num_vars)` solves a plain list of integer
  clauses over variables `1..num_vars`, returning an assignment dictionary or
  `None`.
- `memcnf.boolvector.BoolVector` is a bit vector packed most significant bit
  first in each byte, with bit access, resizing, inversion, shifts and
  `|`, `&`, `^`.
- `memcnf.clause.Clause` holds the positive and negative literal vectors of a
  clause; `memcnf.clause.CNF` is the ordered list of clauses.

## Limitations

Only the built-in solver is used; there is no option to hand the formula to
an external SAT solver, and the DIMACS text is printed rather than written to
a file.

## Running the tests

```
pip install .[test]
pytest
```