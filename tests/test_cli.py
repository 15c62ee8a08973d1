import click
import pytest
import srsly
from click.testing import CliRunner

from treapviz.cli import cli, parse_operation


def test_parse_operation():
    assert parse_operation("insert:50") == ("insert", 50, None)
    assert parse_operation("insert:50:90") == ("insert", 50, 90)
    assert parse_operation("DELETE:-3") == ("delete", -3, None)
    assert parse_operation("search:7") == ("search", 7, None)


@pytest.mark.parametrize(
    "text",
    ["jump:5", "insert", "insert:abc", "insert:5000", "insert:5:101", "delete:5:5"],
)
def test_parse_operation_invalid(text):
    with pytest.raises(click.BadParameter):
        parse_operation(text)


def test_cli_run():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["run", "insert:50:100", "insert:30:10", "insert:70:10", "search:30"]
    )
    assert result.exit_code == 0
    assert "[30, 50, 70]" in result.output
    assert "[50, 30, 70]" in result.output


def test_cli_run_invalid_operation():
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "insert:50", "bogus:1"])
    assert result.exit_code == 1
    result = runner.invoke(cli, ["run", "insert:5000"])
    assert result.exit_code == 1


def test_cli_run_layout():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["run", "insert:50:100", "insert:30:10", "--layout", "--width=1024"]
    )
    assert result.exit_code == 0
    assert "Layout" in result.output


def test_cli_run_export_and_load(tmp_path):
    runner = CliRunner()
    path = str(tmp_path / "treap.json")
    result = runner.invoke(
        cli, ["run", "insert:50:10", "insert:30:90", f"--export={path}"]
    )
    assert result.exit_code == 0
    assert srsly.read_json(path) == {
        "key": 30,
        "priority": 90,
        "left": None,
        "right": {"key": 50, "priority": 10, "left": None, "right": None},
    }

    result = runner.invoke(cli, ["run", "insert:40:5", f"--load={path}"])
    assert result.exit_code == 0
    assert "[30, 40, 50]" in result.output


def test_cli_run_load_invalid(tmp_path):
    runner = CliRunner()
    path = tmp_path / "bad.json"
    srsly.write_json(
        path,
        {
            "key": 5,
            "priority": 1,
            "left": {"key": 9, "priority": 0, "left": None, "right": None},
            "right": None,
        },
    )
    result = runner.invoke(cli, ["run", f"--load={path}"])
    assert result.exit_code == 1
    result = runner.invoke(cli, ["run", f"--load={tmp_path / 'missing.json'}"])
    assert result.exit_code == 1


def test_cli_run_load_bad_values(tmp_path):
    runner = CliRunner()
    path = tmp_path / "bad-values.json"
    srsly.write_json(
        path,
        {
            "key": 5,
            "priority": "high",
            "left": {"key": 1, "priority": 3, "left": None, "right": None},
            "right": None,
        },
    )
    result = runner.invoke(cli, ["run", f"--load={path}"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, TypeError)
    srsly.write_json(path, {"key": 1.5, "priority": 3, "left": None, "right": None})
    result = runner.invoke(cli, ["run", f"--load={path}"])
    assert result.exit_code == 1


def test_cli_random(tmp_path):
    runner = CliRunner()
    path = str(tmp_path / "random.json")
    result = runner.invoke(cli, ["random", "--count=8", "--seed=1", f"--export={path}"])
    assert result.exit_code == 0
    assert srsly.read_json(path) is not None


def test_cli_scenario():
    runner = CliRunner()
    result = runner.invoke(cli, ["scenario", "--seed=0"])
    assert result.exit_code == 0
    first = result.output.index("Completed: Fix Critical Bug")
    second = result.output.index("Completed: Security Patch")
    last = result.output.index("Completed: Write Documentation")
    assert first < second < last
