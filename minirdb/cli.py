"""Command that runs parsed SQL through the analyzer and prints the results."""

from __future__ import annotations

import argparse
import pprint
import sys
from collections.abc import Sequence
from typing import Optional, TextIO

from minirdb.analyzer import AnalysisError, analyze
from minirdb.catalog import Catalog
from minirdb.lexer import LexError
from minirdb.parser import ParseError, parse

VALID_SQLS = (
    "SELECT * FROM users",
    "SELECT id, name FROM users",
    "SELECT id FROM users WHERE id > 10",
    "SELECT id FROM users WHERE id = 1 AND name = 'Alice'",
    "SELECT id + 1 FROM users",
    "SELECT 1 + 2 FROM users",
    "INSERT INTO users VALUES (1, 'Alice')",
    "INSERT INTO users VALUES (2, NULL)",
)

ERROR_SQLS = (
    ("SELECT * FROM unknown_table", "table not found"),
    ("SELECT unknown_col FROM users", "column not found"),
    ("INSERT INTO users VALUES (1)", "wrong number of values"),
    ("INSERT INTO users VALUES ('Alice', 1)", "type mismatch"),
    ("INSERT INTO users VALUES (NULL, 'Alice')", "not nullable"),
    ("CREATE TABLE users (id INT)", "table already exists"),
)


def _pretty(obj: object) -> str:
    return pprint.pformat(obj, width=100)


def run_demo(out: TextIO) -> None:
    """Parse and analyze the demo statements, writing the results to out."""
    catalog = Catalog()

    print("=== Parser + Analyzer Demo ===\n", file=out)
    for sql in VALID_SQLS:
        print(f"SQL: {sql}", file=out)
        try:
            stmt = parse(sql)
        except (LexError, ParseError) as exc:
            print(f"Parse Error: {exc}\n", file=out)
            continue
        print(f"AST: {_pretty(stmt)}", file=out)
        try:
            analyzed = analyze(catalog, stmt)
        except AnalysisError as exc:
            print(f"Analyze Error: {exc}\n", file=out)
        else:
            print(f"Analyzed: {_pretty(analyzed)}\n", file=out)

    print("=== Error Cases ===\n", file=out)
    for sql, expected in ERROR_SQLS:
        print(f"SQL: {sql}", file=out)
        print(f"Expected: {expected}", file=out)
        try:
            stmt = parse(sql)
        except (LexError, ParseError) as exc:
            print(f"Parse Error: {exc}\n", file=out)
            continue
        try:
            analyzed = analyze(catalog, stmt)
        except AnalysisError as exc:
            print(f"Got: {exc}\n", file=out)
        else:
            print(f"Unexpected success: {_pretty(analyzed)}\n", file=out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the parser and analyzer demo."""
    parser = argparse.ArgumentParser(
        prog="minirdb", description="Parse and analyze sample SQL statements."
    )
    parser.parse_args(argv)
    run_demo(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())