"""Synchronous command processing with storage failures surfaced uniformly.

Each command handler runs inside its own Protean unit of work; when the
handler or the commit fails, the unit of work rolls back every staged change
(stock movements and order writes alike) before the exception reaches here.
"""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from ordering.shared.errors import TransactionFailure

logger = structlog.get_logger(__name__)


def process(command):
    """Process ``command`` synchronously and return the handler's result.

    Version conflicts on a part or order (a concurrent writer committed
    first) and database errors become ``TransactionFailure``. Nothing is
    retried.
    """
    command_name = command.__class__.__name__
    try:
        return current_domain.process(command, asynchronous=False)
    except ExpectedVersionError as exc:
        logger.warning("Concurrent update rolled back", command=command_name, error=str(exc))
        raise TransactionFailure("A concurrent update touched the same records; nothing was committed") from exc
    except SQLAlchemyError as exc:
        logger.error("Storage commit failed", command=command_name, exc_info=True)
        raise TransactionFailure() from exc
