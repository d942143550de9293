from pathlib import Path

import httpx
import pytest

import cli
from conftest import EDITOR_CODE, STUDENT_CODE
from examgate.app import app
from examgate.client import HttpGateway
from examgate.utils import json_load, json_pretty


@pytest.fixture
def asgi_gateway(monkeypatch: pytest.MonkeyPatch, api_client):
    def factory(server: str) -> HttpGateway:
        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=server)
        return HttpGateway(server, client=client)

    monkeypatch.setattr(cli, "HttpGateway", factory)


def test_parse_args_requires_command() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["--code", STUDENT_CODE])


def test_parse_args_export() -> None:
    args = cli.parse_args(["--code", STUDENT_CODE, "export", "out.json"])
    assert args.command == "export"
    assert args.output == Path("out.json")
    assert args.server == "http://127.0.0.1:8000"


def test_verify_prints_role(asgi_gateway, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--code", EDITOR_CODE, "verify"]) == 0
    assert "role: editor" in capsys.readouterr().out


def test_invalid_code_exits_1(asgi_gateway, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--code", "nope", "verify"]) == 1
    assert "Invalid access code" in capsys.readouterr().out


def test_import_then_export(asgi_gateway, tmp_path: Path, sample_definition) -> None:
    source = tmp_path / "test.json"
    source.write_text(json_pretty(sample_definition.to_payload()), encoding="utf-8")
    assert cli.main(["--code", EDITOR_CODE, "import", str(source)]) == 0

    output = tmp_path / "export.json"
    assert cli.main(["--code", STUDENT_CODE, "export", str(output)]) == 0
    assert json_load(output.read_text(encoding="utf-8")) == sample_definition.to_payload()


def test_student_import_reports_error(
    asgi_gateway, tmp_path: Path, sample_definition, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "test.json"
    source.write_text(json_pretty(sample_definition.to_payload()), encoding="utf-8")
    assert cli.main(["--code", STUDENT_CODE, "import", str(source)]) == 2
    assert "may not perform save-questions" in capsys.readouterr().err
