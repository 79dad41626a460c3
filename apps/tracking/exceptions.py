"""
Tracker Exceptions
Rejection and failure taxonomy shared by the validator, store and views
"""


class TrackerError(Exception):
    """Base class for every tracker failure"""


class Unauthorized(TrackerError):
    """Shared secret missing or wrong"""

    def __init__(self, message='Wrong key'):
        super().__init__(message)


class ValidationError(TrackerError):
    """
    A request parameter was rejected

    Attributes:
        field: Name of the offending parameter
        code: Short machine readable rejection tag
    """
    code = 'invalid'

    def __init__(self, field, message=None):
        self.field = field
        super().__init__(message or f'{field}: {self.code}')


class MissingField(ValidationError):
    code = 'missing'


class NotNumeric(ValidationError):
    code = 'not_numeric'


class TooLong(ValidationError):
    code = 'too_long'


class OutOfRange(ValidationError):
    code = 'out_of_range'


class StorageError(TrackerError):
    """Database engine failure on read or write"""


class ConfigurationError(TrackerError):
    """Unusable configuration value; callers fall back to a safe default"""
