import json

import config
from main import main


def test_cli_builds_from_seed_data(monkeypatch, capsys):
    monkeypatch.setattr(config, "GOOGLE_PLACES_API_KEY", "")
    monkeypatch.setattr(config, "USE_STUB_LLM", True)
    code = main(["--city", "Paris", "--audience", "her", "--interests", "art,food",
                 "--date", "2025-09-19", "--budget", "120"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["meta"]["city"] == "Paris"
    assert data["meta"]["data_source"] == "seed"
    assert any(not item["is_placeholder"] for item in data["items"])


def test_cli_preview(monkeypatch, capsys):
    monkeypatch.setattr(config, "GOOGLE_PLACES_API_KEY", "")
    monkeypatch.setattr(config, "USE_STUB_LLM", True)
    assert main(["--date", "2025-09-19", "--preview"]) == 0
    assert set(json.loads(capsys.readouterr().out)) == {"title", "subtitle"}


def test_cli_rejects_bad_date(capsys):
    assert main(["--date", "someday"]) == 2
    assert "date" in capsys.readouterr().err
