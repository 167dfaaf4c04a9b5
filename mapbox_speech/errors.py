class SpeechError(Exception):
    """Base exception for speech API errors"""
    pass

class SpeechConfigError(SpeechError, ValueError):
    """Raised when speech configuration is invalid"""
    pass

class SpeechEncodingError(SpeechError):
    """Raised when request text cannot be percent-encoded"""
    pass

class SpeechNetworkError(SpeechError):
    """Raised when network-related errors occur (timeout, connection issues)"""
    pass

class SpeechRequestError(SpeechError):
    """Raised when the speech API rejects a request"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code

class SpeechRateLimitError(SpeechRequestError):
    """Raised when the speech API rate limit is exceeded"""
    pass
