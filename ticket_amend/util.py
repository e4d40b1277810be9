from __future__ import annotations
import logging
import os
import re
from pathlib import Path
from typing import Iterable, List

from .errors import FrontmatterError

# Paths

TICKETS_DIRNAME = ".tickets"
TICKETS_DIR_ENV = "TICKETS_DIR"
LOG_LEVEL_ENV = "TICKETS_LOG_LEVEL"


def ticket_filename(ticket_id: str) -> str:
    return f"{ticket_id}.md"


def list_ticket_files(root: Path) -> List[str]:
    return sorted(name for name in os.listdir(root) if name.endswith(".md"))


# Text I/O

def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FrontmatterError(f"Error: {path} is not valid UTF-8") from exc


def write_text(path: Path, content: str):
    path.write_text(content, encoding="utf-8")


# Tag lists: "[a, b, c]", "[]", or a bare "a,b"

def split_list(value: str | None) -> List[str]:
    if not value:
        return []
    cleaned = re.sub(r"^\[|\]$", "", value.strip())
    return unique_preserve(t.strip() for t in cleaned.split(",") if t.strip())


def format_list(values: Iterable[str]) -> str:
    return "[" + ", ".join(values) + "]"


def unique_preserve(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


# Logging

def configure_logging(env=None):
    env = os.environ if env is None else env
    level_name = (env.get(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    root = logging.getLogger("ticket_amend")
    root.setLevel(level)
    # rebind to the current sys.stderr on every call
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("ticket-amend: %(levelname)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False
