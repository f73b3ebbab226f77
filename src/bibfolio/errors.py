"""Exception types raised by bibfolio."""

__all__ = ["BibfolioError", "ParseError", "ConfigError"]


class BibfolioError(Exception):
    """Base class for bibfolio errors."""


class ParseError(BibfolioError):
    """Raised when a bibliography file is structurally invalid."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


class ConfigError(BibfolioError):
    """Raised when a site configuration file is missing or invalid."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
