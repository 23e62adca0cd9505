import pytest
from loguru import logger

from dbtesting.config import configure_logging, get_default_logger


@pytest.fixture
def restore_logging():
    yield
    configure_logging("DEBUG")


@pytest.mark.unit
def test_default_logger_prefix(restore_logging):
    lines = []
    configure_logging("INFO", sink=lines.append)

    get_default_logger().warning("cleanup: {}", "boom")

    assert len(lines) == 1
    assert "dbtesting - cleanup: boom" in lines[0]


@pytest.mark.unit
def test_unbound_records_get_default_prefix(restore_logging):
    lines = []
    configure_logging("INFO", sink=lines.append)

    logger.info("plain")

    assert "dbtesting - plain" in lines[0]


@pytest.mark.unit
def test_level_filters(restore_logging):
    lines = []
    configure_logging("ERROR", sink=lines.append)

    get_default_logger("films").warning("ignored")
    get_default_logger("films").error("kept")

    assert len(lines) == 1
    assert "films - kept" in lines[0]
