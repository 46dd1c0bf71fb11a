"""Use cases for managing push subscriptions."""

from .register_push_subscription import register_push_subscription
from .unregister_push_subscription import unregister_push_subscription

__all__ = ["register_push_subscription", "unregister_push_subscription"]
