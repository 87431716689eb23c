"""Configuration variables and their per-event rendering.

Target fields such as the application name may reference a named entry of
the variable table with ``${var:NAME}``. The reference is bound once, when
the target is initialized, and rendered for every event afterwards. A table
entry is a ``Layout`` whose text may itself contain event placeholders::

    ${level}  ${message}  ${logger}  ${date}  ${exception}
    ${event-properties:NAME}
"""

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .models import LogEvent


logger = logging.getLogger(__name__)

VARIABLE_REFERENCE = re.compile(r'^\$\{var:([^}]+)\}$')
LAYOUT_TOKEN = re.compile(r'\$\{([a-z-]+)(?::([^}]*))?\}')


class Layout:
    """Text rendered against a log event."""

    def __init__(self, text: str):
        self.text = text

    def render(self, event: LogEvent) -> str:
        return LAYOUT_TOKEN.sub(lambda m: self._render_token(m, event), self.text)

    def _render_token(self, match: re.Match, event: LogEvent) -> str:
        name, argument = match.group(1), match.group(2)

        if name == 'level':
            return event.level.value
        if name == 'message':
            return event.message
        if name == 'logger':
            return event.logger_name
        if name == 'date':
            return event.timestamp.isoformat()
        if name == 'exception':
            return event.exception or ''
        if name == 'event-properties' and argument:
            value = event.properties.get(argument)
            return '' if value is None else str(value)

        return ''

    def __eq__(self, other):
        return isinstance(other, Layout) and other.text == self.text

    def __hash__(self):
        return hash(self.text)

    def __repr__(self):
        return f"Layout({self.text!r})"


class VariableTable:
    """Read-only view of named configuration variables.

    The mapping stays owned by the caller, who may keep changing it;
    targets only ever see the ``snapshot`` taken when they initialize.
    """

    def __init__(self, variables: Optional[Mapping[str, Union[str, Layout]]] = None):
        self._variables = variables if variables is not None else {}

    def lookup(self, name: str) -> Optional[Layout]:
        value = self._variables.get(name)
        if value is None or isinstance(value, Layout):
            return value
        return Layout(str(value))

    def snapshot(self) -> Mapping[str, Layout]:
        """Return a frozen copy of the current variables."""
        return MappingProxyType({name: self.lookup(name) for name in self._variables})

    def __contains__(self, name: str) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)


@dataclass(frozen=True)
class ResolvedField:
    """A configuration value bound to a literal or to a variable layout."""

    raw: str
    variable_name: Optional[str] = None
    layout: Optional[Layout] = None

    @property
    def is_literal(self) -> bool:
        return self.variable_name is None

    @property
    def is_resolved(self) -> bool:
        return self.is_literal or self.layout is not None

    def render(self, event: LogEvent) -> str:
        if self.is_literal:
            return self.raw
        if self.layout is None:
            return ''
        return self.layout.render(event)


def parse_variable_reference(raw: str) -> Optional[str]:
    """Return the variable name of a ``${var:NAME}`` reference, if any."""
    match = VARIABLE_REFERENCE.match(raw.strip())
    if not match:
        return None
    return match.group(1).strip()


def resolve_variable(raw: str, variables: Mapping[str, Layout]) -> ResolvedField:
    """Bind a configuration string to a literal or to a variable layout.

    Args:
        raw: Configuration value as written by the user
        variables: Variables known at initialization time

    Returns:
        Resolved field; unresolved when the referenced name is missing
    """
    name = parse_variable_reference(raw)
    if name is None:
        return ResolvedField(raw=raw)

    layout = variables.get(name)
    if layout is None:
        logger.warning(f"Variable '{name}' referenced by '{raw}' is not defined")

    return ResolvedField(raw=raw, variable_name=name, layout=layout)
