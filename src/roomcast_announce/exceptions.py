class PreconditionViolation(Exception):
    """Raised when the announce session is used in a way it does not allow."""
    pass
