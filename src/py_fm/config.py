"""Shell configuration — separator, prompts, and help banner layout.

The shell reads no configuration files or environment variables.  What
it does need (the host path separator and the fixed interface texts) is
gathered into a single frozen ``ShellConfig`` so that tests can build a
shell for a different host without patching module globals.
"""

import os
from dataclasses import dataclass, field

from py_fm.logging import DEFAULT_CAPACITY

COMMAND_PROMPT = "Enter input (use '>' to give multiple input values at once): "


def host_separator(os_name: str | None = None) -> str:
    """Return the path separator for a host OS family.

    Args:
        os_name: The ``os.name`` value to inspect.  Defaults to the
            running interpreter's.

    Returns:
        ``\\`` for Windows-like hosts, ``/`` for everything else.

    """
    name = os.name if os_name is None else os_name
    return "\\" if name == "nt" else "/"


@dataclass(frozen=True)
class ShellConfig:
    """Settings chosen once at startup.

    Attributes:
        separator: Path separator used when constructing paths.
        prompt: The main command prompt.
        banner_width: Width of the ``=`` rule around the help banner.
        column_width: Width of each verb column in the help banner.
        columns: Number of verbs printed per banner row.
        banner_title: Heading shown inside the help banner.
        log_capacity: Most recent audit log entries kept in memory.

    """

    separator: str = field(default_factory=host_separator)
    prompt: str = COMMAND_PROMPT
    banner_width: int = 60
    column_width: int = 20
    columns: int = 3
    banner_title: str = "Available Commands:"
    log_capacity: int = DEFAULT_CAPACITY
