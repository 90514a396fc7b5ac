"""Exceptions raised by the scrape-and-import pipeline.

Only render failures and cancellation escape a run. Store failures are
raised per record by a ConcertStore and collected by the importer.
"""

from __future__ import annotations


class ConcertInfoError(Exception):
    """Base class for all concertinfo errors."""


class RenderError(ConcertInfoError):
    """The browser session could not be set up or the page not rendered."""


class NavigationTimeout(RenderError):
    """The target page did not reach the settle condition within budget."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Navigation to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class StoreError(ConcertInfoError):
    """A store rejected a single insert."""


class RunCancelled(ConcertInfoError):
    """The run's cancellation token was set at a suspension point."""


class UnknownTargetError(ConcertInfoError, KeyError):
    def __str__(self) -> str:
        return f"Unknown import target: {self.args[0]!r}"
