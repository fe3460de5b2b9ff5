"""Error taxonomy for file manager operations.

Operations never let a raw ``OSError`` reach the user unclassified when a
stable message exists for it.  Internal helpers raise one of the classes
below with the exact text the user should see; the public operation
catches ``FileManagerError`` and prints ``str(error)``.  Host failures
that have no stable message (permissions, cross-device renames, ...) are
printed verbatim instead.
"""


class FileManagerError(Exception):
    """Base class for every classified operation failure."""


class InvalidPathError(FileManagerError):
    """Raised when a path argument cannot name anything on the host."""


class NotFoundError(FileManagerError):
    """Raised when the target file or directory does not exist."""


class AlreadyExistsError(FileManagerError):
    """Raised when an operation requires a name that is already taken."""


class DeletionCancelledError(FileManagerError):
    """Raised when the user declines a recursive delete."""
