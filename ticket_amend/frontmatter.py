"""Line-oriented frontmatter for ticket files.

A ticket file is ``---``, a block of ``key: value`` lines, ``---``, then the
markdown body. Only that flat subset is understood: any other line inside
the block (blank, indented, comments) is kept as an opaque line and written
back unchanged in its original position.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from . import util
from .errors import FrontmatterError

DELIMITER = "---"

FRONTMATTER_RE = re.compile(r"\A---\n(.*?)\n---\n(.*)\Z", re.DOTALL)
FIELD_RE = re.compile(r"^([a-z][a-z0-9-]*): ?(.*)$")
KEY_RE = re.compile(r"^[a-z][a-z0-9-]*$")


@dataclass
class Field:
    key: str
    value: str
    raw: Optional[str] = None

    def render(self) -> str:
        # untouched fields keep their exact original text
        if self.raw is not None:
            return self.raw
        return f"{self.key}: {self.value}"


@dataclass
class Opaque:
    raw: str

    def render(self) -> str:
        return self.raw


Entry = Union[Field, Opaque]


@dataclass
class Frontmatter:
    entries: List[Entry] = field(default_factory=list)
    body: str = ""

    def _find(self, key: str) -> Optional[Field]:
        for entry in self.entries:
            if isinstance(entry, Field) and entry.key == key:
                return entry
        return None

    def get(self, key: str) -> Optional[str]:
        entry = self._find(key)
        return entry.value if entry is not None else None

    def keys(self) -> List[str]:
        return [e.key for e in self.entries if isinstance(e, Field)]

    def set(self, key: str, value: str):
        """Replace the first ``key`` in place, or add it after the last line."""
        entry = self._find(key)
        if entry is None:
            self.entries.append(Field(key, value))
            return
        entry.value = value
        entry.raw = None

    def append_list(self, key: str, values: Iterable[str]) -> str:
        """Append values to a ``[a, b]`` list field, skipping ones already present.

        Returns the encoded list that was written back.
        """
        current = util.split_list(self.get(key))
        for value in values:
            if value not in current:
                current.append(value)
        encoded = util.format_list(current)
        self.set(key, encoded)
        return encoded

    def append_body(self, text: str):
        self.body = self.body.rstrip() + "\n\n" + text + "\n"

    def render(self) -> str:
        lines = "\n".join(entry.render() for entry in self.entries)
        return f"{DELIMITER}\n{lines}\n{DELIMITER}\n{self.body}"


def parse_line(line: str) -> Entry:
    m = FIELD_RE.match(line)
    if m:
        return Field(m.group(1), m.group(2), raw=line)
    return Opaque(line)


def parse(text: str) -> Frontmatter:
    m = FRONTMATTER_RE.match(text)
    if not m:
        raise FrontmatterError("Error: ticket has no valid frontmatter")
    entries = [parse_line(line) for line in m.group(1).split("\n")]
    return Frontmatter(entries=entries, body=m.group(2))


def is_valid_key(key: str) -> bool:
    return bool(KEY_RE.match(key))
