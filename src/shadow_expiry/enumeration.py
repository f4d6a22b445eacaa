"""Walk the account database and collect expirable logins."""

import logging
from concurrent.futures import ThreadPoolExecutor

from shadow_expiry.database import AccountDatabase
from shadow_expiry.extractor import lookup
from shadow_expiry.models import ExpirableLogin, ExpirationInfo

logger = logging.getLogger(__name__)


def _lookup_pair(login: str, database: AccountDatabase) -> tuple[str, ExpirationInfo | None]:
    return login, lookup(login, database)


def list_expirable_logins(
    database: AccountDatabase,
    workers: int = 1,
    include_unexpirable: bool = False,
) -> list[ExpirableLogin]:
    """
    Look up every login in *database* and keep those whose account expires.

    Output follows database order. With workers > 1 lookups run on a thread
    pool; each lookup is independent, so only the ordering is re-established.
    """
    logins = database.logins()
    if workers > 1 and len(logins) > 1:
        with ThreadPoolExecutor(max_workers=min(workers, len(logins))) as pool:
            pairs = list(pool.map(lambda login: _lookup_pair(login, database), logins))
    else:
        pairs = [_lookup_pair(login, database) for login in logins]

    results: list[ExpirableLogin] = []
    for login, info in pairs:
        if info is None:
            continue
        if not info.expirable and not include_unexpirable:
            logger.debug("Skipping %s: account expiration disabled", login)
            continue
        results.append(ExpirableLogin(login=login, expiration=info))

    logger.debug("Enumerated %d logins, %d reported", len(logins), len(results))
    return results
