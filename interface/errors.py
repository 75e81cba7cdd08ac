class FatalError(RuntimeError):
    """Terminal state can no longer be guaranteed; the process has to stop."""


class TerminalStateError(FatalError):
    pass


class EditorNotFoundError(FatalError):
    pass


class EditorLaunchError(FatalError):
    """The editor exists but the OS refused to start it."""


__all__ = ["FatalError", "TerminalStateError", "EditorNotFoundError", "EditorLaunchError"]
