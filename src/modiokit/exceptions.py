"""Exception hierarchy for modiokit.

All exceptions inherit from :class:`ModioKitError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`modiokit.exit_codes`.
The CLI entry point catches ``ModioKitError`` and exits with the
appropriate code.

The translator itself raises very little: missing optional data is
defaulted, and a mod with an invalid identity is reported as ``None``.
Exceptions are reserved for payloads that cannot be read at all and for
callers that explicitly ask for a hard failure
(:func:`~modiokit.translator.require_mod_profile`).

Subclass hierarchy::

    ModioKitError (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- RecordNotFoundError  (exit 4)
    +-- WireFormatError      (exit 7)
    +-- ConfigError          (exit 1)
"""

from modiokit.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_WIRE_FORMAT_ERROR,
)


class ModioKitError(Exception):
    """Base exception for all modiokit errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ModioKitError):
    """Raised for invalid CLI arguments or page requests."""

    exit_code = EXIT_INVALID_USAGE


class RecordNotFoundError(ModioKitError):
    """Raised when a primary record has an invalid (zero) identity."""

    exit_code = EXIT_NOT_FOUND


class WireFormatError(ModioKitError):
    """Raised when a payload does not match the service's JSON shape."""

    exit_code = EXIT_WIRE_FORMAT_ERROR


class ConfigError(ModioKitError):
    """Raised for configuration problems (invalid JSON, bad values, bad env overrides)."""

    exit_code = EXIT_GENERIC_FAILURE
