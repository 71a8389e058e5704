import os
import sys
from typing import Optional

from loguru import logger

from cdma.config import LogConfig


def setup_logging(config: Optional[LogConfig] = None) -> None:
    """
    Настройка loguru: stderr и, если задан каталог, файл с ротацией.
    Библиотечные модули только пишут в logger, синки ставит приложение.
    """
    config = config or LogConfig()

    logger.remove()
    logger.add(
        sys.stderr,
        level=config.level,
        format="{time:HH:mm:ss} | {level} | {message}",
    )

    if config.dir:
        os.makedirs(config.dir, exist_ok=True)
        logger.add(
            sink=os.path.join(config.dir, "{time:YYYY-MM-DD}.log"),
            rotation=config.rotation,
            retention=config.retention,
            level=config.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            enqueue=True,
        )
