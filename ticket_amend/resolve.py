from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from . import util
from .errors import AmbiguousTicket, TicketNotFound, TicketsDirNotFound, TicketsDirUnreadable

logger = logging.getLogger(__name__)


def find_tickets_dir(env: Optional[Mapping[str, str]] = None, cwd: Optional[Path] = None) -> Path:
    """Locate the ticket store.

    ``TICKETS_DIR`` wins when set, without checking that it exists. Otherwise
    the first ``.tickets`` directory found walking up from ``cwd`` (inclusive)
    is used.
    """
    env = os.environ if env is None else env
    override = env.get(util.TICKETS_DIR_ENV)
    if override:
        logger.debug("using %s=%s", util.TICKETS_DIR_ENV, override)
        return Path(override)

    current = Path.cwd() if cwd is None else Path(cwd)
    while True:
        candidate = current / util.TICKETS_DIRNAME
        if candidate.is_dir():
            logger.debug("found tickets dir %s", candidate)
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    raise TicketsDirNotFound(
        f"Error: no {util.TICKETS_DIRNAME} directory found (searched parent directories)",
        hint=f"Run 'tk create' to initialize, or set {util.TICKETS_DIR_ENV} env var",
    )


def resolve_ticket(tickets_dir: Path, ticket_id: str) -> Path:
    """Map a full or partial ticket id to exactly one ``<id>.md`` file."""
    needle = ticket_id.strip()
    exact = tickets_dir / util.ticket_filename(needle)
    if exact.is_file():
        return exact

    try:
        names = util.list_ticket_files(tickets_dir)
    except OSError as exc:
        logger.debug("listing %s failed: %s", tickets_dir, exc)
        raise TicketsDirUnreadable(f"Error: cannot read {tickets_dir}") from exc

    matches = [name for name in names if needle in name]
    if len(matches) == 1:
        logger.debug("partial id %r resolved to %s", ticket_id, matches[0])
        return tickets_dir / matches[0]
    if len(matches) > 1:
        candidates = [ticket_id_from_path(Path(name)) for name in matches]
        logger.debug("partial id %r matches %s", ticket_id, ", ".join(candidates))
        raise AmbiguousTicket(f"Error: ambiguous ID '{ticket_id}' matches multiple tickets", candidates)
    raise TicketNotFound(f"Error: ticket '{ticket_id}' not found")


def ticket_id_from_path(path: Path) -> str:
    return path.stem if path.suffix == ".md" else path.name
