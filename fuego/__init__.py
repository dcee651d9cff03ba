"""Request context, body deserialization, HTTP errors and entity scaffolding for web APIs."""

__version__ = "0.1.0"

__all__ = ["cli", "context", "deserialization", "errors", "messages", "templates"]