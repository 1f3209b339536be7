class AnonymizationError(Exception):
    """Raised when anonymization cannot guarantee PII-free output."""
