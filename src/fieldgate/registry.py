"""
Token registry.

Maps rule tokens ("gt", "len", "each", ...) to constructors that build a
Check from the raw argument text of a clause. The registry is mutable
and can be extended by callers at any time; a registration replaces any
earlier constructor for the same token.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from .checks import Check

Constructor = Callable[[str], Check]

logger = logging.getLogger(__name__)


class CheckRegistry:
    """
    Mutable token -> constructor mapping.

    Usage:
        registry = CheckRegistry.with_builtins()
        registry.register("pword", lambda arg: matches(r"^(?=.*\\d).{4,8}$"))
        check = registry.resolve("gt", "18")

    Registration and lookup are guarded by a lock, so tokens can be
    registered while other threads validate. Constructors are invoked
    outside the lock.
    """

    def __init__(self, name: str = 'custom'):
        self.name = name
        self._constructors: Dict[str, Constructor] = {}
        self._lock = threading.RLock()

    @classmethod
    def with_builtins(cls, name: str = 'builtins') -> 'CheckRegistry':
        """Build a fresh registry holding the built-in token vocabulary."""
        from .builtins import install_builtins

        registry = cls(name)
        install_builtins(registry)
        return registry

    def register(self, token: str, constructor: Constructor) -> 'CheckRegistry':
        """Store ``constructor`` under ``token``, replacing any earlier entry."""
        token = token.strip()
        if not token:
            raise ValueError('token must be a non-empty string')
        with self._lock:
            replaced = token in self._constructors
            self._constructors[token] = constructor
        if replaced:
            logger.debug("Registry %s: replaced token %r", self.name, token)
        return self

    def unregister(self, token: str) -> bool:
        """Remove ``token``. Returns False if it was not registered."""
        token = token.strip()
        with self._lock:
            return self._constructors.pop(token, None) is not None

    def get(self, token: str) -> Optional[Constructor]:
        token = token.strip()
        with self._lock:
            return self._constructors.get(token)

    def resolve(self, token: str, argument: str = '') -> Optional[Check]:
        """
        Build the check for one clause.

        Returns None when ``token`` is not registered; callers skip the
        clause in that case.
        """
        constructor = self.get(token)
        if constructor is None:
            return None
        return constructor(argument)

    def tokens(self) -> List[str]:
        """Registered tokens, in registration order."""
        with self._lock:
            return list(self._constructors)

    def __contains__(self, token: object) -> bool:
        if isinstance(token, str):
            token = token.strip()
        with self._lock:
            return token in self._constructors

    def __len__(self) -> int:
        with self._lock:
            return len(self._constructors)


_default: Optional[CheckRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> CheckRegistry:
    """The process-wide registry used when no registry is passed explicitly."""
    global _default
    with _default_lock:
        if _default is None:
            _default = CheckRegistry.with_builtins('default')
        return _default


def register_token(token: str, constructor: Constructor) -> None:
    """
    Register a custom token on the default registry.

    The new constructor applies to every rule string parsed afterwards;
    checks that were already built keep their old behaviour.
    """
    default_registry().register(token, constructor)
