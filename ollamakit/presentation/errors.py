"""
CLI usage errors, distinct from the library's OllamaError family.
"""


class CLIError(Exception):
    """Base class for command-line usage errors."""

    prefix = "Error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}")


class UnknownCommand(CLIError):
    prefix = "Unknown command"


class MissingArgument(CLIError):
    prefix = "Missing argument"


class InvalidArgument(CLIError):
    prefix = "Invalid argument"
