"""
Shared fixtures for vvsml tests
"""

import pytest
from loguru import logger

from vvsml.config import AppSettings


@pytest.fixture
def warnings():
    """Collect loguru WARNING messages emitted during a test"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def settings():
    """Default settings, independent of the environment's VVSML_* variables"""
    return AppSettings(max_passes=256, strict_mode=False, collapse_whitespace=True)
