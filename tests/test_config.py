"""Tests for environment-driven settings."""

import pytest

from open_terrain.config import Settings
from open_terrain.terrain.variogram import DEFAULT_VARIOGRAM


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "DEFAULT_K",
            "MAX_WORKERS",
            "VARIOGRAM_MODEL",
            "VARIOGRAM_PSILL",
            "VARIOGRAM_RANGE",
            "VARIOGRAM_NUGGET",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.default_k == 10
        assert settings.max_workers == 4
        assert settings.default_variogram() == DEFAULT_VARIOGRAM

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_K", "6")
        monkeypatch.setenv("VARIOGRAM_MODEL", "Gau")
        monkeypatch.setenv("VARIOGRAM_RANGE", "120.5")
        monkeypatch.setenv("VARIOGRAM_NUGGET", "0.02")

        settings = Settings.from_env()
        model = settings.default_variogram()

        assert settings.default_k == 6
        assert model.model == "gaussian"
        assert model.range == 120.5
        assert model.nugget == 0.02
