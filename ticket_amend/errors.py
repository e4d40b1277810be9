"""Failures raised while amending a ticket.

Every failure is fatal for the invocation. Lower layers raise; ``cli.main``
is the only place that catches them and turns them into stderr output and
a non-zero exit code.
"""

from __future__ import annotations


class AmendError(Exception):
    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def lines(self) -> list[str]:
        out = [self.message]
        if self.hint:
            out.append(self.hint)
        return out


class UsageError(AmendError):
    """Bad command line: unknown option, missing id, malformed KEY=VALUE."""


class ResolutionError(AmendError):
    pass


class TicketsDirNotFound(ResolutionError):
    pass


class TicketsDirUnreadable(ResolutionError):
    pass


class TicketNotFound(ResolutionError):
    pass


class AmbiguousTicket(ResolutionError):
    def __init__(self, message: str, candidates: list[str]) -> None:
        super().__init__(message)
        self.candidates = candidates


class FrontmatterError(AmendError):
    pass


class NothingToAmend(AmendError):
    pass
