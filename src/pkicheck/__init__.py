"""pkicheck — startup validation for PKI realms and TLS client authentication."""

__version__ = "0.1.0"
