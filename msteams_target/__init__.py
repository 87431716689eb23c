"""Log target posting log events to Microsoft Teams incoming webhooks.

Events are rendered by a pluggable message card and posted over HTTP.
Application name and environment may be literals or ``${var:NAME}``
references into a variable table, bound when the target is initialized.
"""

from .errors import (
    TargetError,
    ConfigurationError,
    TargetStateError,
    DeliveryFailure,
    TransportError,
)
from .models import LogLevel, LogEvent, TargetConfig, TargetState
from .variables import Layout, VariableTable, ResolvedField, resolve_variable
from .cards import BaseMessageCard, DefaultCard, card_registry, register_card
from .target import MsTeamsTarget
from .handler import MsTeamsHandler, event_from_record
from .config import ConfigLoadError, load_target_config, load_variable_table

__version__ = "1.0.0"

__all__ = [
    # Errors
    'TargetError',
    'ConfigurationError',
    'TargetStateError',
    'DeliveryFailure',
    'TransportError',
    'ConfigLoadError',

    # Models
    'LogLevel',
    'LogEvent',
    'TargetConfig',
    'TargetState',

    # Variables
    'Layout',
    'VariableTable',
    'ResolvedField',
    'resolve_variable',

    # Message cards
    'BaseMessageCard',
    'DefaultCard',
    'card_registry',
    'register_card',

    # Target and logging integration
    'MsTeamsTarget',
    'MsTeamsHandler',
    'event_from_record',
    'load_target_config',
    'load_variable_table',
]
