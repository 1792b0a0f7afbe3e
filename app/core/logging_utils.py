import logging

# Global project logger (can be tuned via logging_config)
logger = logging.getLogger("soundhaven")


def log_info(message: str) -> None:
    """
    Neutral information message.
    """
    logger.info("%s", message)


def log_step(message: str) -> None:
    """
    Action step / ongoing work.
    """
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    """
    Successful outcome.
    """
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """
    Warning / non-fatal problem.
    """
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    """
    Error / fatal problem.
    """
    logger.error("❌ %s", message)


def log_exception(message: str) -> None:
    """
    Error with the active exception's traceback attached.
    """
    logger.exception("❌ %s", message)
