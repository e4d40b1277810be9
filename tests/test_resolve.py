from pathlib import Path

import pytest

from ticket_amend import resolve, util
from ticket_amend.errors import AmbiguousTicket, TicketNotFound, TicketsDirNotFound


def touch(root: Path, *names):
    for name in names:
        (root / name).write_text("---\nid: x\n---\n", encoding="utf-8")


def test_exact_match_wins_over_partial(tmp_path):
    touch(tmp_path, "ab-12.md", "ab-123.md")
    assert resolve.resolve_ticket(tmp_path, " ab-12 ") == tmp_path / "ab-12.md"


def test_partial_match(tmp_path):
    touch(tmp_path, "ab-1234.md", "cd-5678.md", "notes.txt")
    assert resolve.resolve_ticket(tmp_path, "567") == tmp_path / "cd-5678.md"


def test_partial_match_ignores_non_markdown(tmp_path):
    touch(tmp_path, "ab-1234.md", "ab-1234.txt")
    assert resolve.resolve_ticket(tmp_path, "ab-12") == tmp_path / "ab-1234.md"


def test_not_found(tmp_path):
    touch(tmp_path, "ab-1234.md")
    with pytest.raises(TicketNotFound, match="not found"):
        resolve.resolve_ticket(tmp_path, "zz")


def test_ambiguous(tmp_path):
    touch(tmp_path, "ab-1234.md", "ab-5678.md")
    with pytest.raises(AmbiguousTicket, match="ambiguous") as info:
        resolve.resolve_ticket(tmp_path, "ab")
    assert info.value.candidates == ["ab-1234", "ab-5678"]


def test_walk_finds_tickets_dir_above_cwd(tmp_path):
    (tmp_path / ".tickets").mkdir()
    deep = tmp_path / "a" / "b" / "c"
    deep.mkdir(parents=True)
    assert resolve.find_tickets_dir(env={}, cwd=deep) == tmp_path / ".tickets"


def test_walk_ignores_plain_file_named_tickets(tmp_path):
    (tmp_path / ".tickets").mkdir()
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / ".tickets").write_text("", encoding="utf-8")
    assert resolve.find_tickets_dir(env={}, cwd=sub) == tmp_path / ".tickets"


def test_env_override_beats_walk(tmp_path):
    (tmp_path / ".tickets").mkdir()
    other = tmp_path / "elsewhere"
    other.mkdir()
    found = resolve.find_tickets_dir(env={"TICKETS_DIR": str(other)}, cwd=tmp_path)
    assert found == other


def test_walk_without_tickets_dir_fails(tmp_path, monkeypatch):
    # a name no ancestor of tmp_path can already hold
    dirname = f".tickets-{tmp_path.name}-absent"
    monkeypatch.setattr(util, "TICKETS_DIRNAME", dirname)
    with pytest.raises(TicketsDirNotFound) as info:
        resolve.find_tickets_dir(env={}, cwd=tmp_path)
    assert f"no {dirname} directory found" in info.value.message
    assert "TICKETS_DIR" in info.value.hint


def test_ticket_id_from_path():
    assert resolve.ticket_id_from_path(Path("/x/ab-1234.md")) == "ab-1234"
