"""orshot -- command-line client for the Orshot rendering service.

This package wraps the Orshot HTTP API in a Typer CLI. Users log in with an
API key, browse *library* and *studio* templates, inspect the modifications
each template accepts, and render images, PDFs and videos from them.

Typical workflow::

    orshot auth login <api-key>
    orshot templates studio
    orshot generate studio <template-id> -m title="Hello" -f pdf --dpi 300

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for credentials, templates and render requests.
    config: XDG-aware paths and persisted settings.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    render: Maps CLI options onto render request bodies.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "1.0.0"
