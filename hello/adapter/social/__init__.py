"""Outbound social publishing adapter."""

from .client import MockSocialClient, RealSocialClient

__all__ = ["MockSocialClient", "RealSocialClient"]
