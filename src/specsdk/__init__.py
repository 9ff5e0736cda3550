"""specsdk -- Generate typed client SDKs from OpenAPI 3.0/3.1 specs.

This package converts an OpenAPI document into the source of a client
library for a target language. The document is parsed into validated
models, walked into a language-agnostic *client model* (methods and named
types), and rendered through the templates of a per-language *adapter*.

Typical workflow::

    specsdk generate --spec openapi.json --name Petstore
    specsdk generate --spec openapi.yaml --name Petstore --lang python -o ./sdk

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Generator configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
