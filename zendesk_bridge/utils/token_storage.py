"""Token storage for the Zendesk OAuth access token."""

import threading
from abc import ABC, abstractmethod
from typing import Optional
from zendesk_bridge.utils.logger import get_logger

logger = get_logger(__name__)


class TokenStore(ABC):
    """Holder for the bearer token used by Zendesk API calls."""
    
    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the current token, or None if no token is held."""
    
    @abstractmethod
    def set(self, token: str) -> None:
        """Replace the held token."""
    
    @abstractmethod
    def clear(self) -> None:
        """Forget the held token."""
    
    def has_token(self) -> bool:
        """
        Check if a token is held.
        
        Returns:
            True if a non-empty token is held
        """
        return bool(self.get())


class InMemoryTokenStore(TokenStore):
    """
    Process-wide single-slot token store.
    
    Every caller shares the one slot, so concurrent OAuth callbacks from
    different users overwrite each other and the last one wins. Tokens are
    lost on restart and never refreshed.
    """
    
    def __init__(self, token: Optional[str] = None):
        self._lock = threading.Lock()
        self._token = token
    
    def get(self) -> Optional[str]:
        with self._lock:
            return self._token
    
    def set(self, token: str) -> None:
        if not token:
            raise ValueError("Cannot store an empty token")
        
        with self._lock:
            replaced = self._token is not None
            self._token = token
        
        if replaced:
            logger.info("Replaced stored Zendesk access token")
        else:
            logger.info("Stored Zendesk access token")
    
    def clear(self) -> None:
        with self._lock:
            self._token = None
        logger.info("Cleared stored Zendesk access token")
