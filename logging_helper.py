import logging

RED = "\033[91m"
YELLOW = "\033[93m"
GREEN = "\033[92m"
RESET = "\033[0m"
WHITE = "\033[97m"

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s.%(msecs)03d - %(name)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("product_api")

_STATUS_STYLE = {
    "error": (RED, logging.ERROR),
    "warning": (YELLOW, logging.WARNING),
    "good": (GREEN, logging.INFO),
}


def log_status(status, message, extra=""):
    status = status.lower()
    color, level = _STATUS_STYLE.get(status, (WHITE, logging.INFO))

    if not extra:
        logger.log(level, f"{color}{message}{RESET}")
    else:
        logger.log(level, f"{color}{message}{extra}{RESET}")


def log_request(method, url, status_code, elapsed_ms):
    status = "good" if status_code < 400 else "warning"
    log_status(status, f"{method.upper()} {url} -> {status_code}", f" ({elapsed_ms:.0f} ms)")
