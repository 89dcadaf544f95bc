class PlaygroundError(Exception):
    """Base class for errors raised by the network engine."""


class NetworkConfigError(PlaygroundError, ValueError):
    """The network (or a function lookup) was configured inconsistently."""


class InvocationError(PlaygroundError, ValueError):
    """A training or inference call was made with invalid arguments."""
