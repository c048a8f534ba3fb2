"""표준화된 로거 모듈.

`configure_logging()`이 호출되기 전(스크립트, 테스트 등)에도
동일한 형식으로 출력되도록 모듈 단위 로거를 제공합니다.
"""

import logging
import sys

from app.core.logging_config import resolve_log_level

_LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """표준화된 로거를 반환합니다.

    루트 로거에 핸들러가 이미 구성되어 있으면 전파에 맡기고,
    그렇지 않은 경우에만 stdout 핸들러를 붙입니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용).

    Returns:
        설정된 로거 인스턴스.
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_log_level())

    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
