import argparse
import logging
import sys
from typing import List, Tuple

from . import frontmatter, resolve, util
from .amend import AmendRequest, amend_ticket
from .errors import AmendError, UsageError

logger = logging.getLogger(__name__)

DESCRIBE_FLAG = "--tk-describe"
DESCRIPTOR = "tk-plugin: Amend fields on an existing ticket"

USAGE = """Usage: ticket-amend <id> [options]

Amend fields on an existing ticket.

Options:
  -d, --description TEXT    Append to description
  -t, --type TYPE           Set type (bug, feature, task, epic, chore)
  -p, --priority NUM        Set priority (0-4)
  -a, --assignee NAME       Set assignee
  --external-ref REF        Set external reference
  --parent ID               Set parent ticket
  --tags TAG1,TAG2          Append tags
  --set KEY=VALUE           Set any frontmatter field (repeatable)
  --append KEY=VALUE        Append to any list field (repeatable)
  -h, --help                Show this help

Environment:
  TICKETS_DIR               Ticket directory (default: nearest .tickets)
  TICKETS_LOG_LEVEL         Log level for diagnostics on stderr"""


class Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(f"Error: {message}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    # discovery must work even where no ticket store exists
    if DESCRIBE_FLAG in argv:
        print(DESCRIPTOR)
        return 0
    if not argv or "-h" in argv or "--help" in argv:
        print(USAGE)
        return 0

    util.configure_logging()
    try:
        request = parse_request(argv)
        tickets_dir = resolve.find_tickets_dir()
        ticket_id = amend_ticket(tickets_dir, request)
    except AmendError as exc:
        for line in exc.lines():
            print(line, file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Amended {ticket_id}")
    return 0


def run():
    sys.exit(main())


def build_parser():
    p = Parser(prog="ticket-amend", add_help=False, allow_abbrev=False)
    p.add_argument("ids", nargs="*")
    p.add_argument("-d", "--description")
    p.add_argument("-t", "--type")
    p.add_argument("-p", "--priority")
    p.add_argument("-a", "--assignee")
    p.add_argument("--external-ref")
    p.add_argument("--parent")
    p.add_argument("--tags")
    p.add_argument("--set", dest="set_fields", action="append", default=[], metavar="KEY=VALUE")
    p.add_argument("--append", dest="append_fields", action="append", default=[], metavar="KEY=VALUE")
    return p


# flags that always take the next token as their value, even one starting with "-"
VALUE_FLAGS = {
    "-d": "--description",
    "--description": "--description",
    "-t": "--type",
    "--type": "--type",
    "-p": "--priority",
    "--priority": "--priority",
    "-a": "--assignee",
    "--assignee": "--assignee",
    "--external-ref": "--external-ref",
    "--parent": "--parent",
    "--tags": "--tags",
    "--set": "--set",
    "--append": "--append",
}


def bind_values(argv: List[str]) -> List[str]:
    """Join each value flag with the token after it into ``--flag=value``."""
    out: List[str] = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in VALUE_FLAGS and i + 1 < len(argv):
            out.append(f"{VALUE_FLAGS[token]}={argv[i + 1]}")
            i += 2
            continue
        if token == "--":
            raise UsageError(f"Unknown option: {token}")
        out.append(token)
        i += 1
    return out


def parse_request(argv: List[str]) -> AmendRequest:
    args, extras = build_parser().parse_known_intermixed_args(bind_values(argv))
    for token in extras:
        if token.startswith("-"):
            raise UsageError(f"Unknown option: {token}")

    # an empty string is no id at all
    ids = [t for t in (args.ids or []) + extras if t]
    if not ids:
        raise UsageError("Error: ticket ID is required")
    if len(ids) > 1:
        logger.debug("ignoring extra arguments: %s", " ".join(ids[1:]))

    return AmendRequest(
        ticket_id=ids[0],
        description=args.description,
        type=args.type,
        priority=args.priority,
        assignee=args.assignee,
        external_ref=args.external_ref,
        parent=args.parent,
        tags=args.tags,
        set_fields=[split_assignment("--set", item) for item in args.set_fields],
        append_fields=[split_assignment("--append", item) for item in args.append_fields],
    )


def split_assignment(flag: str, item: str) -> Tuple[str, str]:
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise UsageError(f"Error: {flag} expects KEY=VALUE, got '{item}'")
    if not frontmatter.is_valid_key(key):
        raise UsageError(f"Error: invalid field name '{key}' (use lowercase letters, digits and '-')")
    return key, value


if __name__ == "__main__":
    sys.exit(main())
