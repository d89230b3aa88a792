import pytest
from pydantic import ValidationError

from confluence import CombinatorConfig


class TestCombinatorConfig:

    def test_defaults(self):
        config = CombinatorConfig()
        assert config.error_policy == "first"
        assert config.fair_merge is True
        assert config.label is None

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValidationError):
            CombinatorConfig(error_policy="random")

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            CombinatorConfig(timeout=3)

    def test_is_frozen(self):
        config = CombinatorConfig()
        with pytest.raises(ValidationError):
            config.fair_merge = False

    def test_with_label(self):
        config = CombinatorConfig(error_policy="last")
        labelled = config.with_label("race")
        assert labelled.label == "race"
        assert labelled.error_policy == "last"
        assert config.with_label(None) is config

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CONFLUENCE_ERROR_POLICY", "LAST")
        monkeypatch.setenv("CONFLUENCE_FAIR_MERGE", "false")
        config = CombinatorConfig.from_env()
        assert config.error_policy == "last"
        assert config.fair_merge is False

    def test_from_env_defaults_when_unset(self, monkeypatch):
        monkeypatch.delenv("CONFLUENCE_ERROR_POLICY", raising=False)
        monkeypatch.delenv("CONFLUENCE_FAIR_MERGE", raising=False)
        assert CombinatorConfig.from_env() == CombinatorConfig()

    def test_from_env_invalid_value(self, monkeypatch):
        monkeypatch.setenv("APP_ERROR_POLICY", "middle")
        with pytest.raises(ValidationError):
            CombinatorConfig.from_env(prefix="APP_")
