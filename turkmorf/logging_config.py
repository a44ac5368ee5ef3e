import logging
import sys
from datetime import datetime


def setup_logging(log_file=None, level=logging.INFO, debug=False):
    """
    Set up logging for turkmorf.

    Args:
        log_file: Optional path of a log file to append to. Console only when None.
        level: Logging level (default: INFO).
        debug: If True, forces DEBUG level and adds source locations to records.
    """
    # Clear existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if debug:
        level = logging.DEBUG

    if debug:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    else:
        format_string = '%(asctime)s - %(levelname)s - %(message)s'

    # Results go to stdout, so log records stay on stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(format_string))
        root_logger.addHandler(file_handler)

        logging.info("=" * 80)
        logging.info(f"NEW RUN STARTED - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        logging.info("=" * 80)

    if debug:
        logging.debug("DEBUG MODE ENABLED - Verbose logging active")


def log_with_context(message, context=None, level=logging.DEBUG, logger=None):
    """
    Log a message with additional context (word, roots, node counts, etc.).

    Args:
        message: Main log message
        context: Dict of contextual information
        level: Log level (default: DEBUG)
        logger: Logger to use (default: the root logger)
    """
    logger = logger or logging.getLogger()
    logger.log(level, message)

    if context and logger.isEnabledFor(logging.DEBUG):
        for key, value in context.items():
            # Truncate long values
            str_value = str(value)
            if len(str_value) > 200:
                str_value = str_value[:200] + "..."
            logger.debug(f"  └─ {key}: {str_value}")
