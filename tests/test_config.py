"""
Tests for EngineConfig loading and validation.
"""

import os

import pytest

from src.core.config import EngineConfig
from src.core.constants import REFERENCE_SPANS

ENV_VARS = (
    "PTOPT_WORKERS",
    "PTOPT_MAX_EVALUATIONS",
    "PTOPT_TIME_LIMIT",
    "PTOPT_REFERENCE_SPANS",
    "PTOPT_STORE_DIR",
    "PTOPT_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.workers == 1
        assert config.max_evaluations is None
        assert config.time_limit is None
        assert config.reference_spans == tuple(float(s) for s in REFERENCE_SPANS)
        assert config.log_level == "INFO"

    def test_log_level_uppercased(self):
        assert EngineConfig(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("kwargs", [
        {"workers": 0},
        {"max_evaluations": 0},
        {"time_limit": 0.0},
        {"reference_spans": ()},
        {"reference_spans": (24.0, -1.0)},
        {"log_level": "LOUD"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)


class TestFromEnv:
    def test_defaults_without_env(self, clean_env):
        config = EngineConfig.from_env()
        assert config == EngineConfig()

    def test_reads_variables(self, clean_env):
        clean_env.setenv("PTOPT_WORKERS", "4")
        clean_env.setenv("PTOPT_MAX_EVALUATIONS", "500")
        clean_env.setenv("PTOPT_TIME_LIMIT", "2.5")
        clean_env.setenv("PTOPT_REFERENCE_SPANS", "20, 30,40")
        clean_env.setenv("PTOPT_STORE_DIR", "/tmp/pt-projects")
        clean_env.setenv("PTOPT_LOG_LEVEL", "warning")

        config = EngineConfig.from_env()
        assert config.workers == 4
        assert config.max_evaluations == 500
        assert config.time_limit == pytest.approx(2.5)
        assert config.reference_spans == (20.0, 30.0, 40.0)
        assert config.store_dir == "/tmp/pt-projects"
        assert config.log_level == "WARNING"

    def test_empty_optional_values(self, clean_env):
        clean_env.setenv("PTOPT_MAX_EVALUATIONS", "")
        clean_env.setenv("PTOPT_TIME_LIMIT", "")
        config = EngineConfig.from_env()
        assert config.max_evaluations is None
        assert config.time_limit is None

    def test_bad_workers(self, clean_env):
        clean_env.setenv("PTOPT_WORKERS", "many")
        with pytest.raises(ValueError, match="Invalid optimizer configuration"):
            EngineConfig.from_env()

    def test_missing_env_file(self, clean_env, tmp_path):
        with pytest.raises(FileNotFoundError):
            EngineConfig.from_env(str(tmp_path / "missing.env"))

    def test_env_file(self, clean_env, tmp_path, request):
        # load_dotenv writes os.environ directly
        request.addfinalizer(lambda: [os.environ.pop(name, None) for name in ENV_VARS])
        env_file = tmp_path / ".env"
        env_file.write_text("PTOPT_WORKERS=3\nPTOPT_REFERENCE_SPANS=25\n", encoding="utf-8")
        config = EngineConfig.from_env(str(env_file))
        assert config.workers == 3
        assert config.reference_spans == (25.0,)
