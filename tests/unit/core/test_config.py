"""Unit tests for settings and logging setup."""

import logging

import pytest

from core.config import Settings
from core.logging import setup_logging
from core.rate_limit import rate_limit_exceeded_handler


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("DATABASE_URL", "SEED_SAMPLE_TASKS", "RATE_LIMIT_ENABLED"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./tasks.db"
        assert settings.storage_key == "tasks"
        assert settings.id_strategy == "timestamp"
        assert settings.seed_sample_tasks is True
        assert settings.read_rate_limit == "30/minute"
        assert settings.write_rate_limit == "10/minute"

    def test_cors_origins_list(self) -> None:
        settings = Settings(_env_file=None, cors_origins=" http://a.test , ,http://b.test")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    @pytest.mark.parametrize(
        "app_env,log_json,expected",
        [
            ("development", None, False),
            ("production", None, True),
            ("production", False, False),
            ("development", True, True),
        ],
    )
    def test_render_json_logs(self, app_env: str, log_json: bool | None, expected: bool) -> None:
        settings = Settings(_env_file=None, app_env=app_env, log_json=log_json)

        assert settings.render_json_logs is expected

    def test_rejects_unknown_id_strategy(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, id_strategy="sequential")


class TestSetupLogging:
    def test_installs_single_root_handler(self) -> None:
        setup_logging(level="debug", json_logs=True)
        setup_logging(level="warning", json_logs=False)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging(level="chatty")

        assert logging.getLogger().level == logging.INFO


@pytest.mark.asyncio
async def test_rate_limit_handler_uses_error_shape() -> None:
    response = await rate_limit_exceeded_handler(None, RuntimeError("5 per 1 minute"))  # type: ignore[arg-type]

    assert response.status_code == 429
    assert response.headers["retry-after"] == "60"
    assert b"RATE_LIMIT_EXCEEDED" in response.body
