import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    프로세스 전체 로깅 설정. lifespan과 CLI 진입점에서 한 번 호출.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
