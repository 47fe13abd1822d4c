import io

import pytest

from minirdb.cli import main, run_demo


@pytest.fixture
def demo_output():
    out = io.StringIO()
    run_demo(out)
    return out.getvalue()


def test_valid_statements_analyze(demo_output):
    valid_part = demo_output.split("=== Error Cases ===")[0]
    assert valid_part.count("Analyzed: ") == 8
    assert "Analyze Error" not in valid_part
    assert "Parse Error" not in demo_output


@pytest.mark.parametrize(
    "message",
    [
        "Got: table 'unknown_table' not found",
        "Got: column 'unknown_col' not found",
        "Got: INSERT has 1 values but table has 2 columns",
        "Got: type mismatch for column 'id'",
        "Got: column 'id' is not nullable",
        "Got: table 'users' already exists",
    ],
)
def test_error_cases_reported(demo_output, message):
    assert message in demo_output


def test_no_unexpected_success(demo_output):
    assert "Unexpected success" not in demo_output
    assert demo_output.count("Expected: ") == 6


def test_main_prints_demo(capsys):
    assert main([]) == 0
    captured = capsys.readouterr().out
    assert captured.startswith("=== Parser + Analyzer Demo ===")
    assert "SQL: SELECT * FROM users" in captured


def test_main_rejects_unknown_argument():
    with pytest.raises(SystemExit) as info:
        main(["--bogus"])
    assert info.value.code == 2