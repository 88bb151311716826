"""
Node Errors
===========
Exceptions raised by workflow nodes. Messages are shown to users as-is.
"""


class NodeError(Exception):
    """Base class for node failures."""


class NodeExecutionError(NodeError):
    """execute() failed."""


class NodeConfigurationError(NodeError):
    """configure() was given specs the node cannot accept."""


class SettingsValidationError(NodeError):
    """Settings are missing or malformed."""


class ExecutionCanceledError(NodeError):
    """The run was canceled while the node was executing."""

    def __init__(self, message: str = "Execution canceled"):
        super().__init__(message)
