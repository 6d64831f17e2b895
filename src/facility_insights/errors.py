"""Errors raised when the facility dataset cannot be produced or is not ready."""


class DatasetLoadError(RuntimeError):
    """The dataset failed to load, or was requested before loading finished."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


def format_load_error(exc: BaseException) -> str:
    """One-line message for console/API output."""
    if isinstance(exc, FileNotFoundError):
        if exc.filename:
            return f"CSV not found: {exc.filename}"
        return str(exc)
    msg = str(exc).strip()
    if not msg:
        return type(exc).__name__
    return msg.splitlines()[0]
