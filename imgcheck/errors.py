"""
Exception hierarchy for the image checker.

Inspection outcomes ("ok", "broken", "not found") are results, not errors.
Everything here is fatal for the run and unwinds to the top-level handler.
"""


class CheckerError(Exception):
    """Base class for all checker errors."""
    pass


class ConfigError(CheckerError):
    """Raised when required configuration is missing, blank or invalid."""
    pass


class LaunchError(CheckerError):
    """Raised when the browser cannot be started."""
    pass


class ExecutableNotFoundError(LaunchError):
    """Raised when none of the candidate browser executables exist."""

    def __init__(self, candidates):
        self.candidates = list(candidates)
        super().__init__(
            "Chrome executable not found in any expected location: "
            + ", ".join(self.candidates)
        )


class LaunchTimeoutError(LaunchError):
    """Raised when the browser process does not start within its timeout."""
    pass


class LoginFailedError(CheckerError):
    """Raised when the page is still on the login path after submitting."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Login failed: still on login page ({url})")
