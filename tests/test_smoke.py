from click.testing import CliRunner

from relresolve import __version__
from relresolve.cli.main import cli
from relresolve.exceptions import (
    AppNotFound,
    BadAppFile,
    NoGoalsSpecified,
    RelResolveError,
    ReleaseRuntimeError,
)


def test_version():
    assert __version__ == "0.1.0"


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "resolve" in result.output
    assert "release" in result.output


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_error_messages():
    assert str(AppNotFound("cowboy")) == "Application needed for release not found: cowboy"
    assert str(AppNotFound("cowboy", "2.10.0")) == (
        "Application needed for release not found: cowboy-2.10.0"
    )
    assert str(NoGoalsSpecified("rel", "1.0")) == (
        "No applications configured to be included in release rel-1.0"
    )
    assert "Unable to find erts in" in str(ReleaseRuntimeError("/opt/otp"))
    assert "a.app" in str(BadAppFile("/lib/a/ebin/a.app", []))


def test_errors_share_a_base():
    for exc in (
        AppNotFound("a"),
        NoGoalsSpecified("r", "1"),
        BadAppFile("x.app", None),
        ReleaseRuntimeError("/d"),
    ):
        assert isinstance(exc, RelResolveError)
