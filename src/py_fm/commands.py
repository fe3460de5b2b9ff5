"""The closed table of shell verbs.

Several verbs contain a space (``make file``).  That is safe because the
token separator is ``>`` and tokens are trimmed, so the whole first token
is matched against this table.
"""

from enum import StrEnum


class Verb(StrEnum):
    """Every command the shell accepts, in help-banner order."""

    EXIT = "exit"
    LIST = "list"
    PATH = "path"
    INFO = "info"
    CHDIR = "chdir"
    PREVDIR = "prevdir"
    MAKE_FILE = "make file"
    DELETE_FILE = "delete file"
    RENAME_FILE = "rename file"
    READ_FILE = "read file"
    WRITE_FILE = "write file"
    CLEAR_FILE = "clear file"
    COPY_FILE = "copy file"
    MOVE_FILE = "move file"
    MAKE_DIR = "make dir"
    DELETE_DIR = "delete dir"
    RENAME_DIR = "rename dir"
    MOVE_DIR = "move dir"


# Number of tokens each verb consumes, the verb itself included.
ARITY: dict[Verb, int] = {
    Verb.EXIT: 1,
    Verb.LIST: 1,
    Verb.PATH: 1,
    Verb.INFO: 1,
    Verb.CHDIR: 2,
    Verb.PREVDIR: 1,
    Verb.MAKE_FILE: 2,
    Verb.DELETE_FILE: 2,
    Verb.RENAME_FILE: 3,
    Verb.READ_FILE: 2,
    Verb.WRITE_FILE: 3,
    Verb.CLEAR_FILE: 2,
    Verb.COPY_FILE: 3,
    Verb.MOVE_FILE: 3,
    Verb.MAKE_DIR: 2,
    Verb.DELETE_DIR: 2,
    Verb.RENAME_DIR: 3,
    Verb.MOVE_DIR: 3,
}

TOKEN_SEPARATOR = ">"


def parse_command(line: str) -> list[str | None]:
    """Split a command line into its trimmed tokens.

    Empty tokens become ``None`` so that handlers treat them as missing
    arguments and prompt for them.  The verb slot is always a string;
    an empty line yields ``[""]``.

    Args:
        line: One line of user input, without its terminator.

    Returns:
        The argument vector ``[verb, arg1, ...]``.

    """
    verb, *rest = (token.strip() for token in line.split(TOKEN_SEPARATOR))
    return [verb, *(token or None for token in rest)]


def lookup_verb(token: str | None) -> Verb | None:
    """Return the verb named by *token*, or None if it is not a command."""
    try:
        return Verb(token)
    except ValueError:
        return None
