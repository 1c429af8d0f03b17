class MalformedPersistedState(ValueError):
    """Stored stats could not be parsed into a snapshot."""


class InvalidSessionInput(ValueError):
    """A completed session was rejected before touching the snapshot."""
