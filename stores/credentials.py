"""
Vendor credential flag - whether a SpamZilla key is configured.

Only presence is stored, never the key itself.
"""

from config import get_spamzilla_api_key
from repositories import StateRepository, get_repository, VENDOR_CREDENTIALS


class CredentialFlagStore:

    def __init__(self, repository: StateRepository = None, namespace: str = VENDOR_CREDENTIALS):
        self._repo = repository or get_repository()
        self._namespace = namespace
        self.configured = False

    def load(self) -> "CredentialFlagStore":
        data = self._repo.get(self._namespace) or {}
        self.configured = bool(data.get("configured", False))
        return self

    def save(self) -> None:
        self._repo.save(self._namespace, {"configured": self.configured})

    def set_configured(self, configured: bool) -> None:
        self.configured = bool(configured)
        self.save()

    def sync_from_env(self) -> bool:
        """Mirror SPAMZILLA_API_KEY presence into the flag."""
        present = bool(get_spamzilla_api_key())
        if present != self.configured:
            self.set_configured(present)
        return self.configured
