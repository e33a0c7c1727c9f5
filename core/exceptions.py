"""Custom exceptions for OSF converters"""


class ConverterError(Exception):
    """Base exception for all converter errors"""
    pass


class UnsupportedFormatError(ConverterError):
    """Requested output format has no registered converter"""
    def __init__(self, fmt: str, supported: list[str] = None):
        supported = supported or []
        message = f"Unsupported output format: {fmt}"
        if supported:
            message += f". Supported: {', '.join(supported)}"
        super().__init__(message)
        self.fmt = fmt
        self.supported = supported


class DocumentError(ConverterError):
    """Input cannot be interpreted as a document at all"""
    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field
