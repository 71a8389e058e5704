import pytest
from loguru import logger

from cdma.codes import generate_walsh_codes


@pytest.fixture(autouse=True)
def disable_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def walsh8():
    return generate_walsh_codes(8)
