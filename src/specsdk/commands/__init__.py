"""Built-in CLI sub-commands for specsdk.

This package groups the Typer command modules that form the CLI's
top-level command tree:

* :mod:`~specsdk.commands.generate` -- run the full pipeline and write a
  client.
* :mod:`~specsdk.commands.inspect` -- print the client model's methods and
  types without rendering anything.
* :mod:`~specsdk.commands.languages` -- list the available language
  adapters.

Each module exports either a :class:`typer.Typer` sub-application (for the
multi-command ``inspect`` group) or a plain callback function registered
directly on the root app.
"""
