"""Fixed-interval polling for load-balancer external IPs."""

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300
DEFAULT_INTERVAL = 10


def is_assigned(value: str | None) -> bool:
    """True for a present, non-empty value that is not the literal 'null'."""
    if value is None:
        return False
    value = value.strip()
    return value != "" and value != "null"


def wait_for_external_ip(
    fetch: Callable[[], str | None],
    name: str,
    timeout: int = DEFAULT_TIMEOUT,
    interval: int = DEFAULT_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
) -> str | None:
    """
    Poll until a resource reports an external IP.

    Makes at most ``timeout // interval`` queries, sleeping ``interval``
    seconds after each empty answer. Running out of attempts is not an error.

    Args:
        fetch: Returns the current address field ('' or None if unassigned)
        name: Resource name for log messages
        timeout: Total polling budget in seconds
        interval: Seconds between queries
        sleep: Sleep function

    Returns:
        The external IP, or None if none was assigned within the budget
    """
    logger.info(f"Waiting for service '{name}' to get external IP...")

    max_attempts = timeout // interval
    for attempt in range(1, max_attempts + 1):
        value = fetch()
        if is_assigned(value):
            value = value.strip()
            logger.info(f"Service '{name}' has external IP: {value} ✓")
            return value

        logger.debug(f"'{name}' has no external IP yet (attempt {attempt}/{max_attempts})")
        sleep(interval)

    logger.warning(f"Service '{name}' did not get external IP within timeout")
    return None
