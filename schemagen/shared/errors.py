"""Custom exceptions for schemagen."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base exception for every failure that aborts a generator run."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        full_message = f"{message}" if not source else f"[{source}] {message}"
        super().__init__(full_message)


class ConfigError(GeneratorError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        option: str | None = None,
    ) -> None:
        self.option = option
        if option:
            message = f"Option '{option}': {message}"
        super().__init__(message, source)


class CatalogError(GeneratorError):
    """Raised when the database catalog cannot be queried."""


class OutputError(GeneratorError):
    """Raised when the generated source cannot be written."""


class FormatError(GeneratorError):
    """Raised when the external formatter fails or is missing."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        command: list[str] | None = None,
        returncode: int | None = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        if returncode is not None:
            message = f"{message} (exit code {returncode})"
        super().__init__(message, source)
