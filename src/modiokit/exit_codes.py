"""Numeric process exit codes used by the ``modiokit`` CLI.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~modiokit.exceptions.ModioKitError` subclass.
Shell wrappers can inspect the exit code to tell a malformed capture apart
from a record that does not exist without parsing stderr.

Example::

    $ modiokit translate mod capture.json
    $ echo $?
    4   # EXIT_NOT_FOUND -- the capture holds a mod with id 0
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""The wire payload does not describe a usable record (e.g. a mod with id 0)."""

EXIT_WIRE_FORMAT_ERROR = 7
"""The wire payload could not be validated against the expected JSON shape."""
