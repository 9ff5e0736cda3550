"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specsdk.exceptions.SpecsdkError` subclass.
Build scripts can inspect the exit code to tell a bad spec from a bad
template without parsing stderr.

Example::

    $ specsdk generate --spec missing.json --name Demo
    $ echo $?
    6   # EXIT_SPEC_ACQUISITION_ERROR -- the spec could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_CONFIGURATION_ERROR = 2
"""Mandatory inputs are missing or the target language is not supported."""

EXIT_SPEC_ACQUISITION_ERROR = 6
"""The spec document could not be read (file, network, or stdin failure)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The spec document could not be parsed into the expected structure."""

EXIT_TEMPLATE_ERROR = 8
"""A template is missing for a manifest entry or failed to render."""

EXIT_OUTPUT_ERROR = 9
"""The output directory or a generated file could not be written."""
