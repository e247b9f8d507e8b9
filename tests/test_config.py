# tests/test_config.py
import pytest
from pydantic import ValidationError

from helpdesk.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.api_prefix == "/api"
    assert s.port == 3000
    assert s.database_url.startswith("sqlite+aiosqlite")


@pytest.mark.parametrize("raw, expected", [
    ("api", "/api"),
    ("/api/", "/api"),
    ("/v1/api", "/v1/api"),
    ("/", ""),
])
def test_api_prefix_is_normalized(raw, expected):
    assert Settings(_env_file=None, api_prefix=raw).api_prefix == expected


def test_unknown_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, environment="qa")


def test_custom_prefix_moves_routes(settings, clock):
    from fastapi.testclient import TestClient
    from helpdesk.main import create_app

    app = create_app(settings.model_copy(update={"api_prefix": "/v2"}), clock=clock)
    with TestClient(app) as client:
        assert client.get("/v2/health").status_code == 200
        assert client.get("/v2/tickets").json() == []
        assert client.get("/api/tickets").status_code == 404


def test_settings_are_built_on_demand():
    import helpdesk.config as config

    assert not hasattr(config, "settings")
    assert not hasattr(Settings, "is_sqlite")
    assert config.get_settings() is config.get_settings()
