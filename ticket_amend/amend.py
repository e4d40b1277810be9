from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from . import frontmatter, resolve, util
from .errors import NothingToAmend

logger = logging.getLogger(__name__)

# field name written for each fixed replace option, in application order
SCALAR_FIELDS = [
    ("type", "type"),
    ("priority", "priority"),
    ("assignee", "assignee"),
    ("external_ref", "external-ref"),
]


@dataclass
class AmendRequest:
    ticket_id: str
    description: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    assignee: Optional[str] = None
    external_ref: Optional[str] = None
    parent: Optional[str] = None
    tags: Optional[str] = None
    set_fields: List[Tuple[str, str]] = field(default_factory=list)
    append_fields: List[Tuple[str, str]] = field(default_factory=list)


def apply_request(fm: frontmatter.Frontmatter, request: AmendRequest, resolve_parent: Callable[[str], str]) -> List[str]:
    """Apply every mutation in ``request`` to ``fm``.

    Returns the names of the fields that were changed, ``body`` standing for
    the description. Raises NothingToAmend when the request carries no
    mutation at all.
    """
    changed: List[str] = []

    for attr, key in SCALAR_FIELDS:
        value = getattr(request, attr)
        if value is not None:
            fm.set(key, value)
            changed.append(key)

    if request.parent is not None:
        fm.set("parent", resolve_parent(request.parent))
        changed.append("parent")

    if request.tags is not None:
        fm.append_list("tags", util.split_list(request.tags))
        changed.append("tags")

    for key, value in request.set_fields:
        fm.set(key, value)
        changed.append(key)

    for key, value in request.append_fields:
        fm.append_list(key, util.split_list(value))
        changed.append(key)

    if request.description is not None:
        fm.append_body(request.description)
        changed.append("body")

    if not changed:
        raise NothingToAmend("Nothing to amend (no options provided)")
    for key in changed:
        logger.debug("amended %s", key)
    return changed


def amend_ticket(tickets_dir: Path, request: AmendRequest) -> str:
    """Resolve, rewrite and return the full id of the amended ticket."""
    ticket_path = resolve.resolve_ticket(tickets_dir, request.ticket_id)
    fm = frontmatter.parse(util.read_text(ticket_path))

    def resolve_parent(parent_id: str) -> str:
        return resolve.ticket_id_from_path(resolve.resolve_ticket(tickets_dir, parent_id))

    apply_request(fm, request, resolve_parent)
    util.write_text(ticket_path, fm.render())
    return resolve.ticket_id_from_path(ticket_path)
