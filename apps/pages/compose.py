from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict

log = logging.getLogger("pages.compose")

"""
Parallel content fetches for one page.

- One worker per fetch; results come back under the name they were given.
- Query functions fail soft already, so an exception here is a bug: it is logged
  and re-raised once every fetch has finished.
"""


def gather(**fetches: Callable[[], Any]) -> Dict[str, Any]:
    if not fetches:
        return {}
    if len(fetches) == 1:
        name, fetch = next(iter(fetches.items()))
        return {name: fetch()}

    results: Dict[str, Any] = {}
    first_error: BaseException | None = None
    with ThreadPoolExecutor(max_workers=len(fetches), thread_name_prefix="compose") as executor:
        futures = {name: executor.submit(fetch) for name, fetch in fetches.items()}
        for name, future in futures.items():
            try:
                results[name] = future.result()
            except Exception as exc:
                log.exception("compose_fetch_failed", extra={"fetch": name})
                first_error = first_error or exc
    if first_error is not None:
        raise first_error
    return results
