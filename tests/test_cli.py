import pytest

from journal_api import __main__ as cli


@pytest.mark.parametrize(
    "argv, message",
    [
        (["--log-level", "chatty"], "unknown log level"),
        (["--addr", "8080"], "invalid listen address"),
    ],
)
def test_cli_reports_bad_arguments_as_usage_errors(argv, message, capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: pytest.fail("server must not start"))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == 2
    assert message in capsys.readouterr().err


def test_cli_starts_uvicorn_with_parsed_address(monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kw: calls.append({"app": app, **kw}))

    cli.main(["--addr", "127.0.0.1:9001", "--log-level", "warning"])

    [call] = calls
    assert call["app"] == "journal_api.main:app"
    assert (call["host"], call["port"]) == ("127.0.0.1", 9001)
    assert call["log_level"] == 30
