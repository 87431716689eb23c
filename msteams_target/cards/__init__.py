"""Message card implementations for the Teams target.

Cards turn a log event into the payload posted to the webhook. The
``default`` card is registered on import; custom cards register with
``@register_card`` in their own module.
"""

from .base import (
    BaseMessageCard,
    MessageCardRegistry,
    card_registry,
    register_card,
)

# Import built-in cards to register them
from .default import DefaultCard, MessageCard

__all__ = [
    'BaseMessageCard',
    'MessageCardRegistry',
    'card_registry',
    'register_card',
    'DefaultCard',
    'MessageCard',
]
