class InvalidSizeError(ValueError):
    """Raised when a decision vector does not match the problem size."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super(InvalidSizeError, self).__init__(
            'invalid argument size: expected {}, got {}'.format(
                expected, actual))


class UnsupportedOperationError(NotImplementedError):
    """Raised when a function is asked for an operation it does not have."""
