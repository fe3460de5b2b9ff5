"""py-fm: an interactive file manager shell for the host filesystem.

Commands are typed one per line, with ``>`` separating the verb from its
arguments::

    make file > notes.txt
    write file > notes.txt > first line
    copy file > notes.txt

The shell tracks its own current working directory and resolves every
relative name against it.
"""

__version__ = "1.0.0"
