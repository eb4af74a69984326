"""Command line entry point: parse a program description, print and solve its CNF."""

from __future__ import annotations

import argparse
import sys
from typing import Iterator, Sequence

from memcnf.clause import CNF, Clause
from memcnf.parser import ParseError, ParseResult, format_elements, parse_json_file
from memcnf.solver import format_solution, solve_cnf


def _sample_formulas() -> Iterator[CNF]:
    for positive_bit, negative_bit in ((0, 1), (1, 0)):
        clause = Clause(16)
        clause.positive.set_bit(positive_bit)
        clause.negative.set_bit(negative_bit)
        formula = CNF()
        formula.replace_first(clause)
        yield formula


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Memory-Aware JSON Parser")
    parser.add_argument("file", nargs="?", help="Input JSON file")
    args = parser.parse_args(argv)

    if args.file is None:
        print("Error: No input file specified", file=sys.stderr)
        return 1

    try:
        result = parse_json_file(args.file)
    except ParseError as exc:
        print(exc, file=sys.stderr)
        result = ParseResult(errors=[str(exc)])

    print("\nFinal elements:", file=sys.stderr)
    print(format_elements(result.elements), file=sys.stderr, end="")
    print(result.cnf)
    print("-----------------------")
    for formula in _sample_formulas():
        print(formula)

    solution = solve_cnf(result.cnf, result.elements)
    sys.stdout.write(solution.dimacs)
    print(f"Total variables: {solution.total_variables}", file=sys.stderr)
    sys.stdout.write(format_solution(solution))

    if result.error:
        print("Error:", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())