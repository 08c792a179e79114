"""Exception hierarchy for basketcase."""

from __future__ import annotations

from typing import Sequence


class BasketcaseError(Exception):
    """Base exception for basketcase errors."""
    pass


class UsageError(BasketcaseError):
    """The command line cannot be turned into a runnable command.

    Never retried; reported with a hint to consult ``basketcase help``.
    """


class UnknownCommand(UsageError):
    def __init__(self, name: str | None):
        self.name = name
        if name is None:
            super().__init__("no command specified")
        else:
            super().__init__(f"Unknown command: {name}")


class UnrecognizedOption(UsageError):
    def __init__(self, token: str, command: str | None = None):
        self.token = token
        self.command = command
        super().__init__(f"Unrecognised option: {token}")


class MissingOptionArgument(UsageError):
    def __init__(self, token: str, arity: int):
        self.token = token
        self.arity = arity
        super().__init__(f"Option {token} expects {arity} argument(s)")


class NoTargetSpecified(UsageError):
    def __init__(self) -> None:
        super().__init__("No target specified")


class WrongArgumentCount(UsageError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} arguments, got {actual}")


class ExternalToolFailure(BasketcaseError):
    """The external tool could not be started or exited abnormally.

    Not retried: the tool may already have applied part of a mutation.
    """

    def __init__(self, argv: Sequence[str], returncode: int | None = None, reason: str | None = None):
        self.argv = list(argv)
        self.returncode = returncode
        self.reason = reason
        command = " ".join(self.argv)
        if reason:
            message = f"{command}: {reason}"
        elif returncode is not None and returncode < 0:
            message = f"{command} was terminated by signal {-returncode}"
        else:
            message = f"{command} exited with status {returncode}"
        super().__init__(message)

    @property
    def abnormal(self) -> bool:
        """True when the tool could not be started or was killed by a signal."""
        return self.returncode is None or self.returncode < 0
