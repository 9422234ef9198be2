import logging


def setup_logging(log_level: str = "INFO") -> None:
    """Configure console logging for the roster service."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info("Logging initialized (level=%s)", log_level)
