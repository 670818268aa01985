class PatternError(ValueError):
    """
    Exception raised when a glob pattern cannot be compiled.

    Malformed patterns are configuration errors: they are reported once,
    before any traversal begins.

    Attributes:
        pattern (str): The offending pattern text.

    Example:
        >>> error = PatternError("/", "pattern matches nothing")
        >>> str(error)
        "Invalid pattern '/': pattern matches nothing"
    """

    def __init__(self, pattern: str, reason: str) -> None:
        """
        Initialize the exception with the pattern and the reason it was rejected.

        Args:
            pattern (str): The pattern text that failed to compile.
            reason (str): Short description of the problem.
        """
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ScanCancelled(Exception):
    """
    Exception raised when a directory scan is interrupted through its cancel event.

    Example:
        >>> str(ScanCancelled("/tmp/project"))
        'Scan cancelled while reading /tmp/project'
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Scan cancelled while reading {path}")
