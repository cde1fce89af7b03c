# kushon/exceptions.py

class KushonError(Exception):
    """Base class for errors raised by the tracker core."""

class NotFoundError(KushonError):
    """A referenced title, publisher or user does not exist."""

class ValidationError(KushonError):
    """A request is well formed but violates a catalog rule."""

class EmailDeliveryError(KushonError):
    """Sending one email failed. Fanout logs these and moves on."""
