class QuadTreeError(Exception):
    """Base class for errors raised by the quadtree index."""


class ConfigurationError(QuadTreeError, ValueError):
    """Raised when a tree or window is configured with missing or invalid parameters.

    Attributes:
        parameter (str): Name of the offending parameter, if known.
    """
    def __init__(self, message: str, parameter: str = None):
        super().__init__(message)
        self.parameter = parameter
