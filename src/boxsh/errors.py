"""Exceptions raised by boxsh."""


class BoxshError(Exception):
    """Base class for boxsh errors."""


class NoShellDetectedError(BoxshError):
    """The user's shell could not be determined from the environment."""


class ShellrcError(BoxshError):
    """The session startup file could not be written."""


class SessionError(BoxshError):
    """The sandbox tool failed to start or exited with an error."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class ConfigError(BoxshError):
    """The configuration file could not be read or is invalid."""
