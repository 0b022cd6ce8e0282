"""Provider verification adapters."""

from .base import OPENID_NAMESPACE, STEAM_LOGIN_ENDPOINT, UNREACHABLE_STATUS, ProviderReply, VerificationClient
from .httpx_client import HttpxVerificationClient
from .mock_client import MockVerificationClient

__all__ = [
    "HttpxVerificationClient",
    "MockVerificationClient",
    "OPENID_NAMESPACE",
    "ProviderReply",
    "STEAM_LOGIN_ENDPOINT",
    "UNREACHABLE_STATUS",
    "VerificationClient",
]
