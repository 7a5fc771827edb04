"""Tests for settings, logging setup and name sequences."""

import json
import logging
from pathlib import Path

import pytest

from starforge.constants import DEFAULT_TECH_LEVEL
from starforge.log import ROOT_LOGGER, LoggerConfig, configure_logging, init_logging, set_channel_enabled
from starforge.models.naming import (
    CounterNameSequence,
    FileNameSequence,
    default_sequence,
    next_name,
    set_default_sequence,
    to_roman,
)
from starforge.settings import DEFAULT_CHANNELS, Settings, load_settings


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nope.json")
        assert settings == Settings()
        assert settings.default_tech_level == DEFAULT_TECH_LEVEL
        assert settings.log_channels == DEFAULT_CHANNELS

    def test_reads_camel_case_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "defaultTechLevel": 12,
            "diskAccretionMaxRoll": 8,
            "logLevel": "debug",
            "logChannels": {"dice": True},
            "nameSequenceFile": str(tmp_path / "names.json"),
        }))
        settings = load_settings(path)
        assert settings.default_tech_level == 12
        assert settings.disk_accretion_max_roll == 8
        assert settings.log_level == "DEBUG"
        assert settings.log_channels["dice"] is True
        assert settings.log_channels["stars"] is True
        assert settings.name_sequence_file == tmp_path / "names.json"

    @pytest.mark.parametrize(
        "content",
        ["{not json", "[1, 2, 3]", "{\"defaultTechLevel\": \"high\"}", "{\"logChannels\": [1, 2]}"],
    )
    def test_bad_file_falls_back(self, tmp_path: Path, content: str, caplog) -> None:
        path = tmp_path / "settings.json"
        path.write_text(content)
        with caplog.at_level(logging.WARNING):
            assert load_settings(path) == Settings()
        assert "Ignoring" in caplog.text


class TestLogging:
    def test_config_from_settings(self) -> None:
        config = LoggerConfig.from_settings(Settings(log_level="debug", log_channels={"world": False}))
        assert config.level == logging.DEBUG
        assert config.channels["world"] is False
        assert config.channels["stars"] is True

    def test_unknown_level_defaults_to_info(self) -> None:
        assert LoggerConfig.from_settings(Settings(log_level="LOUD")).level == logging.INFO

    def test_channel_toggles(self, clean_root_logger) -> None:
        configure_logging(LoggerConfig(channels={"world": False, "stars": True}))
        assert logging.getLogger("starforge.models.world").disabled
        assert logging.getLogger("starforge.models.culture").disabled
        assert not logging.getLogger("starforge.models.stars").disabled
        set_channel_enabled("world", True)
        assert not logging.getLogger("starforge.models.world").disabled

    def test_single_handler(self, clean_root_logger) -> None:
        clean_root_logger.handlers = []
        configure_logging(LoggerConfig())
        configure_logging(LoggerConfig())
        assert len(clean_root_logger.handlers) == 1

    def test_init_from_file(self, tmp_path: Path, clean_root_logger) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"logLevel": "WARNING"}))
        root = init_logging(path)
        assert root.level == logging.WARNING


class TestNaming:
    def test_counters_are_per_kind(self) -> None:
        seq = CounterNameSequence()
        assert [seq.next("star"), seq.next("star"), seq.next("system")] == [1, 2, 1]

    def test_next_name(self) -> None:
        seq = CounterNameSequence(start=5)
        assert next_name("Star #{n}", "star", seq) == "Star #5"

    def test_default_sequence_swap(self) -> None:
        original = default_sequence()
        try:
            set_default_sequence(CounterNameSequence(start=40))
            assert next_name("System #{n}", "system") == "System #40"
        finally:
            set_default_sequence(original)

    def test_file_sequence_survives_restart(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "names.json"
        assert FileNameSequence(path).next("star") == 1
        assert FileNameSequence(path).next("star") == 2
        assert FileNameSequence(path).next("companion") == 1
        assert json.loads(path.read_text()) == {"star": 3, "companion": 2}

    def test_file_sequence_reset_and_corruption(self, tmp_path: Path) -> None:
        path = tmp_path / "names.json"
        seq = FileNameSequence(path)
        seq.next("star")
        seq.reset()
        assert not path.exists()
        path.write_text("garbage")
        assert seq.next("star") == 1

    @pytest.mark.parametrize("content", ["[1, 2]", "{\"star\": \"many\"}", "{\"star\": null}"])
    def test_file_sequence_restarts_on_malformed_counters(self, tmp_path: Path, content: str, caplog) -> None:
        path = tmp_path / "names.json"
        path.write_text(content)
        with caplog.at_level(logging.WARNING):
            assert FileNameSequence(path).next("star") == 1
        assert "restarting" in caplog.text
        assert json.loads(path.read_text()) == {"star": 2}

    @pytest.mark.parametrize("number,numeral", [(1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (20, "XX")])
    def test_roman(self, number: int, numeral: str) -> None:
        assert to_roman(number) == numeral
