from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from runware_connector import config as config_module
from runware_connector import main, runtime
from runware_connector.config import ConnectorConfig
from runware_connector.errors import OperationFailedError
from runware_connector.schemas import AuthResult

client = TestClient(main.app)

CAT = {"positivePrompt": "a cat", "model": "runware:101@1", "width": 1024, "height": 1024}


@pytest.fixture
def sent(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, list[dict[str, Any]]]]:
    calls: list[tuple[str, list[dict[str, Any]]]] = []

    def fake_dispatch(api_key: str, tasks: list[dict[str, Any]], **_: Any) -> list[dict]:
        calls.append((api_key, tasks))
        return [{"taskUUID": tasks[0]["taskUUID"], "imageURL": "https://im/x.png"}]

    monkeypatch.setattr(runtime, "dispatch", fake_dispatch)
    return calls


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "actions": 4}


def test_list_actions() -> None:
    response = client.get("/actions")
    assert response.status_code == 200
    assert {a["name"] for a in response.json()} == {
        "generateImageFromText",
        "generateImageFromExistingImage",
        "generateVideoFromText",
        "removeImageBackground",
    }


def test_invoke_action(sent) -> None:
    response = client.post(
        "/actions/generateImageFromText", json={"props": CAT, "auth": "key-123"}
    )

    assert response.status_code == 200
    [(api_key, [task])] = sent
    assert api_key == "key-123"
    assert response.json() == {
        "data": [{"taskUUID": task["taskUUID"], "imageURL": "https://im/x.png"}]
    }


def test_invoke_action_applies_defaults_on_request(sent) -> None:
    props = {"positivePrompt": "a cat", "model": "runware:101@1"}

    response = client.post(
        "/actions/generateImageFromText",
        json={"props": props, "auth": "k", "apply_defaults": True},
    )

    assert response.status_code == 200
    [(_, [task])] = sent
    assert task["width"] == 1024


def test_unknown_action_is_404(sent) -> None:
    response = client.post("/actions/upscaleImage", json={"props": {}, "auth": "k"})
    assert response.status_code == 404
    assert sent == []


def test_validation_failure_is_422(sent) -> None:
    response = client.post(
        "/actions/generateImageFromText",
        json={"props": {**CAT, "height": 1025}, "auth": "k"},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {
        "field": "height",
        "rule": "divisible_by",
        "message": "must be divisible by 64",
    }
    assert sent == []


def test_missing_field_is_422(sent) -> None:
    props = {k: v for k, v in CAT.items() if k != "model"}
    response = client.post("/actions/generateImageFromText", json={"props": props, "auth": "k"})
    assert response.status_code == 422
    assert response.json()["detail"]["field"] == "model"
    assert response.json()["detail"]["rule"] == "required"


def test_missing_credential_is_401(sent) -> None:
    response = client.post("/actions/generateImageFromText", json={"props": CAT})
    assert response.status_code == 401
    assert sent == []


def test_remote_failure_is_502(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_dispatch(*_: Any, **__: Any) -> None:
        raise OperationFailedError("Runware API error 500: boom", status_code=500)

    monkeypatch.setattr(runtime, "dispatch", failing_dispatch)

    response = client.post("/actions/generateImageFromText", json={"props": CAT, "auth": "k"})

    assert response.status_code == 502
    assert response.json()["detail"]["status_code"] == 500


def test_auth_validate(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []

    def fake_check(api_key: str) -> AuthResult:
        seen.append(api_key)
        return AuthResult(valid=False, error="Invalid API key.")

    monkeypatch.setattr(main, "validate_api_key", fake_check)

    response = client.post("/auth/validate", json={"auth": "key-123"})

    assert response.status_code == 200
    assert response.json() == {"valid": False, "error": "Invalid API key."}
    assert seen == ["key-123"]


def test_service_key_guard(monkeypatch: pytest.MonkeyPatch, sent) -> None:
    monkeypatch.setattr(config_module, "_config", ConnectorConfig(api_key="secret"))

    denied = client.post("/actions/generateImageFromText", json={"props": CAT, "auth": "k"})
    allowed = client.post(
        "/actions/generateImageFromText",
        json={"props": CAT, "auth": "k"},
        headers={"X-API-Key": "secret"},
    )

    assert denied.status_code == 401
    assert allowed.status_code == 200
    assert len(sent) == 1


def test_config_hides_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        config_module, "_config", ConnectorConfig(api_key="secret", runware_api_key="rw")
    )

    body = client.get("/config").json()

    assert "api_key" not in body
    assert "runware_api_key" not in body
    assert body["api_url"] == "https://api.runware.ai/v1"


def test_reload(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("api_url: https://proxy.internal/v1\n")
    monkeypatch.setattr(config_module, "_config_path", str(path))

    response = client.post("/reload")

    assert response.status_code == 200
    assert response.json() == {"status": "reloaded", "api_url": "https://proxy.internal/v1"}


def test_reload_without_file_is_500(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "_config_path", str(tmp_path / "missing.yaml"))
    assert client.post("/reload").status_code == 500
