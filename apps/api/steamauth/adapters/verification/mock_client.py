"""Mock verification client for local development and tests."""

from collections.abc import Mapping

from steamauth.adapters.verification.base import OPENID_NAMESPACE, ProviderReply, VerificationClient


class MockVerificationClient(VerificationClient):
    """Confirms deterministic test signatures only.

    ``openid.sig`` of ``test:valid`` is reported valid; every other signature is
    reported invalid. No network traffic is produced.
    """

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []

    def send(self, fields: Mapping[str, str]) -> ProviderReply:
        self.sent.append(dict(fields))
        is_valid = "true" if fields.get("openid.sig") == "test:valid" else "false"
        return ProviderReply(200, f"ns:{OPENID_NAMESPACE}\nis_valid:{is_valid}\n")


__all__ = ["MockVerificationClient"]
