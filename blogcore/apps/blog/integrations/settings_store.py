"""Module settings read through an injected store."""

from typing import Any, Dict, Optional, Protocol, Tuple

from blogcore.core.utils.logging import get_logger

logger = get_logger("settings")


class SettingsStore(Protocol):
    def find_or_set(self, key: str, default: Any, scope: str) -> Any: ...

    def set(self, key: str, value: Any, scope: str) -> Any: ...


class MemorySettingsStore:
    """Process-local store; each instance keeps its own values."""

    def __init__(self, initial: Optional[Dict[Tuple[str, str], Any]] = None):
        self._values: Dict[Tuple[str, str], Any] = dict(initial or {})

    def find_or_set(self, key: str, default: Any, scope: str) -> Any:
        return self._values.setdefault((scope, key), default)

    def set(self, key: str, value: Any, scope: str) -> Any:
        self._values[(scope, key)] = value
        return value


class BlogSettings:
    SCOPE = "blog"
    SHARE_THIS_PLACEHOLDER = "xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"

    def __init__(
        self,
        store: SettingsStore,
        posts_per_page: int = 10,
        share_this_key: Optional[str] = None,
    ):
        self.store = store
        self.default_posts_per_page = posts_per_page
        self.share_this_key = share_this_key

    def comments_allowed(self) -> bool:
        return bool(self.store.find_or_set("comments_allowed", True, self.SCOPE))

    def teasers_enabled(self) -> bool:
        return bool(self.store.find_or_set("teasers_enabled", True, self.SCOPE))

    def toggle_teasers(self) -> bool:
        enabled = not self.teasers_enabled()
        self.store.set("teasers_enabled", enabled, self.SCOPE)
        logger.info("Teasers %s", "enabled" if enabled else "disabled")
        return enabled

    def share_this_enabled(self) -> bool:
        """Sharing buttons need a key other than the shipped placeholder."""
        key = (self.share_this_key or "").strip()
        return bool(key) and key != self.SHARE_THIS_PLACEHOLDER

    def posts_per_page(self) -> int:
        value = self.store.find_or_set(
            "posts_per_page", self.default_posts_per_page, self.SCOPE
        )
        return int(value)
