"""Swapable error classes.

Every failure of the command execution framework derives from
CommandExecutionError. Errors are raised at the point of detection and
propagate unmodified to the caller.
"""


class CommandExecutionError(Exception):
    """Base error for pool command execution."""

    pass


class MissingArgument(CommandExecutionError):
    """A mandatory command argument is absent from the execution context."""

    pass


class InvalidCommand(CommandExecutionError):
    """The requested pool command is not registered."""

    pass


class OperationForbidden(CommandExecutionError):
    """The actor is not allowed to execute the command."""

    pass


class EmptyContract(CommandExecutionError):
    """A command produced no transactions to wrap in a contract."""

    pass


class InvalidDerivationPath(CommandExecutionError):
    """Raised by key providers for malformed derivation paths.

    Key derivation happens outside of this package; the error is defined
    here so that callers can catch it alongside the other command errors.
    """

    pass


class LedgerReadError(Exception):
    """A read from the ledger adapter failed."""

    pass


class ContractRejected(Exception):
    """The ledger refused to settle a contract (nothing was applied)."""

    pass
