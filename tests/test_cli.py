"""Test CLI commands."""

import logging
from pathlib import Path
from typing import List

import pytest
from click.testing import CliRunner

from apsrepo import __version__
from apsrepo.cli import cli
from apsrepo.core.logging import console as log_console

ECHO_ARGS = "import sys; print(' '.join(sys.argv[1:]))"


def urls(output: str) -> List[str]:
    """Return the URL lines of the command output."""
    return [line for line in output.splitlines() if line.startswith("http://")]


@pytest.fixture
def base_args(catalog_file: Path, config_file: Path) -> List[str]:
    """Return the options every invocation needs."""
    return ["--config", str(config_file), "-f", str(catalog_file)]


def test_list_all(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test all repositories are listed without filters."""
    result = cli_runner.invoke(cli, base_args)
    assert result.exit_code == 0
    assert urls(result.output) == [
        "http://host:90/svn/alpha",
        "http://host:90/svn/beta",
        "http://host:90/svn/alphabet",
        "http://host:90/svn/libfoo",
        "http://host:90/svn/LibBar",
        "http://host:90/svn/foo-bar",
    ]


def test_list_matches(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test filter expressions select repositories."""
    result = cli_runner.invoke(cli, [*base_args, "-c", "^alpha$"])
    assert result.exit_code == 0
    assert urls(result.output) == ["http://host:90/svn/alpha"]


def test_list_case_insensitive(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test matching ignores case unless -c is given."""
    result = cli_runner.invoke(cli, [*base_args, "^LIB"])
    assert urls(result.output) == ["http://host:90/svn/libfoo", "http://host:90/svn/LibBar"]

    result = cli_runner.invoke(cli, [*base_args, "-c", "^Lib"])
    assert urls(result.output) == ["http://host:90/svn/LibBar"]


def test_list_web_and_path(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test -w, -p and -s shape the URL."""
    result = cli_runner.invoke(
        cli, [*base_args, "-w", "-p", "/trunk", "-s", "http://other/", "^beta$"]
    )
    assert result.exit_code == 0
    assert urls(result.output) == ["http://other/viewvc/beta/trunk"]


def test_embedded_path_overrides_flag(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test +path replaces -p."""
    result = cli_runner.invoke(
        cli, [*base_args, "-p", "trunk", "^beta$", "--", "-c", ECHO_ARGS, "+branches/b"]
    )
    assert result.exit_code == 0
    assert "http://host:90/svn/beta/branches/b" in result.output


def test_match_any(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test -a lists the matches of each expression in turn."""
    result = cli_runner.invoke(cli, [*base_args, "-a", "^alpha", "bet"])
    assert result.exit_code == 0
    assert urls(result.output) == [
        "http://host:90/svn/alpha",
        "http://host:90/svn/alphabet",
        "http://host:90/svn/beta",
        "http://host:90/svn/alphabet",
    ]


def test_match_any_runs_command(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test -a runs the command for each expression's matches in turn."""
    result = cli_runner.invoke(
        cli, [*base_args, "-a", "^beta$", "^alpha", "--", "-c", ECHO_ARGS]
    )
    assert result.exit_code == 0
    assert urls(result.output) == [
        "http://host:90/svn/beta",
        "http://host:90/svn/alpha",
        "http://host:90/svn/alphabet",
    ]


def test_match_any_failure_stops_later_expressions(
    cli_runner: CliRunner, base_args: List[str], caplog: pytest.LogCaptureFixture
) -> None:
    """Test a failing command under -a stops the remaining expressions."""
    script = (
        "import sys; print(sys.argv[1]); "
        "sys.exit(1 if sys.argv[1].endswith('/alpha') else 0)"
    )
    result = cli_runner.invoke(
        cli, [*base_args, "-a", "^beta$", "^alpha", "^foo", "(", "--", "-c", script]
    )
    assert result.exit_code == 1
    assert urls(result.output) == ["http://host:90/svn/beta", "http://host:90/svn/alpha"]
    commands = [m for m in caplog.messages if m.startswith("| ")]
    assert len(commands) == 2
    assert not any("skipping invalid expression" in m for m in caplog.messages)


def test_match_any_invalid_expression(
    cli_runner: CliRunner, base_args: List[str], caplog: pytest.LogCaptureFixture
) -> None:
    """Test an invalid expression is skipped under -a."""
    result = cli_runner.invoke(cli, [*base_args, "-a", "(", "^beta$"])
    assert result.exit_code == 0
    assert urls(result.output) == ["http://host:90/svn/beta"]
    assert any("skipping invalid expression" in m for m in caplog.messages)


def test_invalid_expression(
    cli_runner: CliRunner, base_args: List[str], caplog: pytest.LogCaptureFixture
) -> None:
    """Test an invalid expression is fatal without -a."""
    result = cli_runner.invoke(cli, [*base_args, "alpha", "("])
    assert result.exit_code == 1
    assert not urls(result.output)
    assert any("invalid expression(s): [ alpha, ( ]" in m for m in caplog.messages)


def test_no_match(
    cli_runner: CliRunner, base_args: List[str], caplog: pytest.LogCaptureFixture
) -> None:
    """Test no match is fatal without -a."""
    result = cli_runner.invoke(cli, [*base_args, "^zzz"])
    assert result.exit_code == 1
    assert any("no repository found matching expression(s)" in m for m in caplog.messages)


def test_no_match_quiet(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test -q keeps errors off the console but still fails."""
    result = cli_runner.invoke(cli, [*base_args, "-q", "^zzz"])
    assert result.exit_code == 1
    # Output holds both streams here, so nothing at all may be printed
    assert result.output == ""
    assert "Aborted" not in result.output


def test_error_not_quiet_aborts(cli_runner: CliRunner, base_args: List[str]) -> None:
    """Test fatal errors end with click's abort message without -q."""
    result = cli_runner.invoke(cli, [*base_args, "^zzz"])
    assert result.exit_code == 1
    assert "Aborted!" in result.output


def test_missing_repo_file(
    cli_runner: CliRunner, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Test a missing repository file is fatal."""
    result = cli_runner.invoke(cli, ["-f", str(tmp_path / "missing"), "alpha"])
    assert result.exit_code == 1
    assert any("cannot read repository file" in m for m in caplog.messages)


def test_run_command(cli_runner: CliRunner, base_args: List[str], tmp_path: Path) -> None:
    """Test the command runs against each match with the output path."""
    out = tmp_path / "out"
    result = cli_runner.invoke(
        cli, [*base_args, "-o", f"{out}/@/^", "^alpha", "--", "-c", ECHO_ARGS, "+trunk"]
    )
    assert result.exit_code == 0
    assert f"http://host:90/svn/alpha/trunk {out}/alpha/trunk" in result.output
    assert f"http://host:90/svn/alphabet/trunk {out}/alphabet/trunk" in result.output
    assert (out / "alpha" / "trunk").is_dir()
    assert (out / "alphabet" / "trunk").is_dir()


def test_dry_run(
    cli_runner: CliRunner,
    base_args: List[str],
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test -d logs the commands without running them."""
    out = tmp_path / "out"
    with caplog.at_level(logging.INFO, logger="apsrepo"):
        result = cli_runner.invoke(
            cli, [*base_args, "-d", "-o", f"{out}/@", "^beta$", "--", "co", "-q"]
        )
    assert result.exit_code == 0
    assert not out.exists()
    assert any(
        m.startswith("| ") and m.endswith(f"co -q http://host:90/svn/beta {out}/beta")
        for m in caplog.messages
    )


def test_command_failure_stops(
    cli_runner: CliRunner, base_args: List[str], caplog: pytest.LogCaptureFixture
) -> None:
    """Test the first failing command ends the run."""
    script = "import sys; sys.stderr.write('svn: E170000: no such repo\\n'); sys.exit(1)"
    result = cli_runner.invoke(cli, [*base_args, "^alpha", "--", "-c", script])
    assert result.exit_code == 1
    assert any("E170000" in m for m in caplog.messages)
    commands = [m for m in caplog.messages if m.startswith("| ")]
    assert len(commands) == 1


def test_delimiter_after_flags(
    cli_runner: CliRunner, base_args: List[str], caplog: pytest.LogCaptureFixture
) -> None:
    """Test a delimiter right after the flags still starts the command."""
    result = cli_runner.invoke(cli, [*base_args, "--", "ls"])
    assert result.exit_code == 0
    assert len(urls(result.output)) == 6
    assert any("no filter expressions given" in m for m in caplog.messages)


def test_help(cli_runner: CliRunner) -> None:
    """Test the help text explains the +path syntax."""
    result = cli_runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "NOTES" in result.output
    assert "+branches/b" in result.output


def test_version(cli_runner: CliRunner) -> None:
    """Test the version option."""
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_log_file(cli_runner: CliRunner, base_args: List[str], tmp_path: Path) -> None:
    """Test --log-file also writes log records to a file."""
    log_file = tmp_path / "logs" / "apsrepo.log"
    result = cli_runner.invoke(
        cli, ["--debug", "--log-file", str(log_file), *base_args, "^beta$"]
    )
    assert result.exit_code == 0
    assert "Options" in log_file.read_text()


def test_long_command_line_not_wrapped(
    cli_runner: CliRunner, base_args: List[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test a command echo wider than the console stays on one line."""
    monkeypatch.setattr(log_console, "width", 40)
    server = "http://" + "h" * 60
    result = cli_runner.invoke(cli, [*base_args, "-d", "-s", server, "^beta$", "--", "co"])
    assert result.exit_code == 0
    assert any(
        "| " in line and line.endswith(f"co {server}/svn/beta")
        for line in result.output.splitlines()
    )
