"""Custom exceptions for Credentials."""


class CredentialError(Exception):
    """Base exception for credential errors."""


class InvalidPasswordError(CredentialError, ValueError):
    """Password is empty or outside the accepted length range."""
