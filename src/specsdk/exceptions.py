"""Exception hierarchy for specsdk.

All exceptions inherit from :class:`SpecsdkError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specsdk.exit_codes`.
The top-level error handler in :func:`specsdk.app.main` catches
``SpecsdkError`` and exits with the appropriate code.

Generation is a single-pass batch transform: there is no retry and no
partial-success continuation, so the first error raised aborts the run.

Subclass hierarchy::

    SpecsdkError (exit 1)
    +-- ConfigurationError    (exit 2)
    +-- SpecAcquisitionError  (exit 6)
    +-- SpecParseError        (exit 7)
    +-- TemplateError         (exit 8)
    +-- OutputError           (exit 9)
"""

from __future__ import annotations

from specsdk.exit_codes import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_OUTPUT_ERROR,
    EXIT_SPEC_ACQUISITION_ERROR,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_TEMPLATE_ERROR,
)


class SpecsdkError(Exception):
    """Base exception for all specsdk errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specsdk.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigurationError(SpecsdkError):
    """Raised for missing mandatory inputs or an unsupported target language."""

    exit_code = EXIT_CONFIGURATION_ERROR


class SpecAcquisitionError(SpecsdkError):
    """Raised when the spec document cannot be read from a file, URL, or stdin."""

    exit_code = EXIT_SPEC_ACQUISITION_ERROR


class SpecParseError(SpecsdkError):
    """Raised when the spec document is malformed (bad JSON/YAML or bad structure)."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class TemplateError(SpecsdkError):
    """Raised when a manifest entry has no template or its template fails to render.

    Args:
        message: Human-readable error description.
        file_key: The manifest key (e.g. ``"client"``) being rendered.
    """

    exit_code = EXIT_TEMPLATE_ERROR

    def __init__(self, message: str, file_key: str | None = None):
        if file_key is not None:
            message = f"{file_key}: {message}"
        super().__init__(message)
        self.file_key = file_key


class OutputError(SpecsdkError):
    """Raised when the output directory or a generated file cannot be written."""

    exit_code = EXIT_OUTPUT_ERROR
