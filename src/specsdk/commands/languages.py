"""The ``specsdk languages`` command -- list available language adapters."""

from __future__ import annotations

from specsdk.output import print_table


def languages_command() -> None:
    """List the target languages specsdk can generate clients for.

    Includes adapters contributed by installed packages through the
    ``specsdk.adapters`` entry-point group.
    """
    from specsdk.adapters import available_adapters

    rows = [
        [
            adapter.name,
            ", ".join(adapter.aliases) or "-",
            adapter.file_extension,
            ", ".join(adapter.dependencies) or "-",
        ]
        for adapter in available_adapters()
    ]
    print_table(
        ["Language", "Aliases", "Extension", "Dependencies"], rows, title="Languages"
    )
