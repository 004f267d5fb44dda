from translator.models.cache_entry import CacheEntry
from translator.models.usage_link import UsageLink
from translator.models.user_profile import UserProfile

__all__ = ["CacheEntry", "UserProfile", "UsageLink"]
