"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """An identity provider rejected or broke the login handshake.

    Routes turn this into the login failure page; it never creates a session.
    """

    pass
