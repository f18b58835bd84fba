"""Instrumentation for the contact/newsletter relay."""
from __future__ import annotations

from prometheus_client import Counter

_SUBMISSIONS_COUNTER = Counter(
    "messaging_submissions_total",
    "Contact and newsletter submissions by kind and outcome.",
    ["kind", "outcome"],
)


def record_submission(kind: str, outcome: str) -> None:
    _SUBMISSIONS_COUNTER.labels(kind=kind, outcome=outcome).inc()


__all__ = ["record_submission"]
