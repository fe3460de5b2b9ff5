"""Allow ``python -m py_fm``."""

from py_fm.repl import main

main()
