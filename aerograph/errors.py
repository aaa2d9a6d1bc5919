class AerographError(Exception):
    """Base class for errors raised by aerograph."""


class InvalidConfiguration(AerographError, ValueError):
    """A solver or brush was configured with unusable parameters."""
