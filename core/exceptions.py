# core/exceptions.py
"""
Custom exceptions for the backend
"""

class FarmAssistError(Exception):
    """Base exception for FarmAssist backend"""
    pass

class ExternalAPIError(FarmAssistError):
    """External API errors"""
    pass

class MalformedSampleError(FarmAssistError):
    """A provider sample is missing a required numeric field or carries an invalid one"""

    def __init__(self, field: str, value=None):
        self.field = field
        self.value = value
        super().__init__(f"Malformed weather sample: '{field}' is missing or invalid (got {value!r})")

class ProviderUnavailableError(ExternalAPIError):
    """Transport-level failure from the weather or market provider"""
    pass

class IncompleteUpstreamDataError(FarmAssistError):
    """One of several concurrently fetched datasets failed"""
    pass
