"""Base classes and registry for message card implementations.

A message card turns one log event into the JSON document posted to the
Teams webhook. Implementations register themselves under a name with
``@register_card``; a target refers to them by that name and, for cards
living outside this package, by the module that defines them.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..errors import ConfigurationError
from ..models import LogEvent


logger = logging.getLogger(__name__)


class BaseMessageCard(ABC):
    """Abstract base class for message cards.

    Cards are created once per target and shared by every dispatch, so
    implementations must not keep per-event state.
    """

    @abstractmethod
    def create_message(self, event: LogEvent, application_name: str, environment: str) -> str:
        """Render the webhook payload for a log event.

        Args:
            event: Log event to render
            application_name: Rendered application name
            environment: Rendered environment name

        Returns:
            Serialized payload, normally JSON
        """
        pass


class MessageCardRegistry:
    """Registry for managing message card types."""

    def __init__(self):
        self._cards: Dict[str, type] = {}

    def register(self, card_type: str, card_class: type) -> None:
        """Register a message card class.

        Args:
            card_type: Name the card is configured with
            card_class: Card class to register
        """
        if not isinstance(card_class, type) or not issubclass(card_class, BaseMessageCard):
            raise ValueError(f"Card class must inherit from BaseMessageCard: {card_class}")

        self._cards[card_type] = card_class

    def get_card_class(self, card_type: str) -> Optional[type]:
        return self._cards.get(card_type)

    def create_card(self, card_type: str, card_module: Optional[str] = None) -> BaseMessageCard:
        """Create a card instance.

        Args:
            card_type: Registered card name
            card_module: Module to import first so that it can register card_type

        Returns:
            Card instance

        Raises:
            ConfigurationError: If the module, the card or its instance cannot be obtained
        """
        if card_module:
            try:
                importlib.import_module(card_module)
            except ImportError as e:
                raise ConfigurationError(f"Cannot import card module '{card_module}': {e}") from e

        card_class = self.get_card_class(card_type)
        if not card_class:
            raise ConfigurationError(f"Unknown message card type: {card_type}")

        try:
            card = card_class()
        except Exception as e:
            raise ConfigurationError(f"Cannot instantiate message card '{card_type}': {e}") from e

        logger.debug(f"Created message card {card_class.__name__} for type '{card_type}'")
        return card

    def list_card_types(self) -> List[str]:
        """List all registered card types."""
        return list(self._cards.keys())


# Global card registry
card_registry = MessageCardRegistry()


def register_card(card_type: str):
    """Decorator to register a message card class.

    Args:
        card_type: Name the card is configured with
    """
    def decorator(card_class: type) -> type:
        card_registry.register(card_type, card_class)
        return card_class

    return decorator
