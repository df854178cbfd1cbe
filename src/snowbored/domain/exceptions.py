class InvalidScore(ValueError):
    """Raised when a reported result could not have come from a real session."""
