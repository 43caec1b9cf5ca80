"""Invocation of user completion callbacks."""

import logging

from syncwait.core.models import Synchronizer, SynchronizerCallback
from syncwait.observability.log import format_event


def fire(
    callback: SynchronizerCallback | None,
    synchronizer: Synchronizer,
    logger: logging.Logger,
    name: str,
) -> None:
    """Call ``callback`` with the record, logging anything it raises.

    A raising callback must not keep the owning operation from settling.
    """
    if callback is None:
        return
    try:
        callback(synchronizer)
    except Exception:
        logger.exception(format_event("callback_raised", callback=name))
