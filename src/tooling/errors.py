from __future__ import annotations


class ToolExit(RuntimeError):
    """A user-facing failure that should end the current command.

    The message is printed as-is, so it must name whatever the user has to fix
    (usually a file path).
    """

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self) -> str:
        return self.message
