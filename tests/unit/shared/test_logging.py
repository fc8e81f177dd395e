from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from facility_store.shared.logging import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "facility.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    logger = get_logger(__name__)
    logger.info("structured log test", building_id="BLDG")


@dataclass
class _LoggingSettings:
    level: str = "WARNING"
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: str = "production"


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level="ERROR"))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR


def test_production_writes_enriched_json_lines(tmp_path) -> None:
    log_file = tmp_path / "facility.log"
    configure_logging(level="INFO", file_path=str(log_file), environment="production")

    get_logger("facility_store.json_check").info("room.renamed", room_id="BLDG-101")
    logging.getLogger("facility_store.plain").warning("plain record")

    lines = [json.loads(line) for line in log_file.read_text().splitlines()]
    structured, plain = lines[-2], lines[-1]
    assert structured["event"] == "room.renamed"
    assert structured["room_id"] == "BLDG-101"
    assert structured["level"] == "info"
    assert structured["logger"] == "facility_store.json_check"
    assert structured["timestamp"].endswith("Z")
    assert plain["event"] == "plain record"
    assert plain["level"] == "warning"
