"""Teams incoming webhook target for log events.

The target renders each log event with the configured message card and
posts it to the webhook. It offers a blocking ``write`` and an awaitable
``write_async`` so that it fits both synchronous and asynchronous logging
pipelines; both run the same coroutine. No retry is attempted here: any
failure is raised and the owning pipeline decides what happens next.
"""

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional, Protocol, Union

import httpx
from pydantic import ValidationError

from .cards import BaseMessageCard, card_registry
from .errors import ConfigurationError, DeliveryFailure, TargetStateError, TransportError
from .models import LogEvent, TargetConfig, TargetState
from .variables import ResolvedField, VariableTable, resolve_variable


logger = logging.getLogger(__name__)

USER_AGENT = "msteams-target/1.0"


class CancellationSignal(Protocol):
    """Anything exposing ``is_set()``, e.g. ``asyncio.Event`` or ``threading.Event``."""

    def is_set(self) -> bool:
        ...


class MsTeamsTarget:
    """Posts log events to a Microsoft Teams incoming webhook."""

    def __init__(
        self,
        config: Union[TargetConfig, Dict[str, Any]],
        variables: Optional[VariableTable] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if isinstance(config, TargetConfig):
            self.config = config
        else:
            try:
                self.config = TargetConfig(**config)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid target configuration: {e}") from e

        self.variables = variables if variables is not None else VariableTable()
        self.transport = transport
        self.state = TargetState.UNINITIALIZED

        self._application_name: Optional[ResolvedField] = None
        self._environment: Optional[ResolvedField] = None

        # Created on first use
        self._message_card: Optional[BaseMessageCard] = None
        self._card_lock = threading.Lock()

    @property
    def message_card(self) -> BaseMessageCard:
        """Card implementation, created once on first access."""
        if self._message_card is None:
            with self._card_lock:
                if self._message_card is None:
                    self._message_card = card_registry.create_card(
                        self.config.card_impl,
                        self.config.card_module
                    )
        return self._message_card

    @property
    def application_name(self) -> Optional[ResolvedField]:
        return self._application_name

    @property
    def environment(self) -> Optional[ResolvedField]:
        return self._environment

    def initialize(self) -> None:
        """Bind the application name and environment to the current variables.

        Later changes of the variable table are not picked up.

        Raises:
            TargetStateError: If the target was already closed
            ConfigurationError: If strict_variables is set and a variable is missing
        """
        if self.state == TargetState.DISPOSED:
            raise TargetStateError("Cannot initialize a closed target")
        if self.state == TargetState.INITIALIZED:
            return

        snapshot = self.variables.snapshot()
        application_name = resolve_variable(self.config.application_name, snapshot)
        environment = resolve_variable(self.config.environment, snapshot)

        if self.config.strict_variables:
            missing = [
                f.variable_name for f in (application_name, environment)
                if not f.is_resolved
            ]
            if missing:
                raise ConfigurationError(f"Undefined variables: {', '.join(missing)}")

        self._application_name = application_name
        self._environment = environment
        self.state = TargetState.INITIALIZED

        logger.info(f"Initialized Teams target for {self.config.url}")

    def close(self) -> None:
        """Mark the target as closed; further writes are rejected."""
        if self.state != TargetState.DISPOSED:
            self.state = TargetState.DISPOSED
            logger.info(f"Closed Teams target for {self.config.url}")

    def write(self, event: LogEvent) -> None:
        """Send a log event and block until the webhook has answered.

        When the calling thread runs an event loop, the request is sent from a
        worker thread so that the loop is left alone while this call blocks.

        Raises:
            DeliveryFailure: If the webhook returned a non-success status
            TransportError: If the request could not be sent
            ConfigurationError: If the message card cannot be created
        """
        self._ensure_initialized()

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._create_and_send_message(event))
            return

        with ThreadPoolExecutor(max_workers=1) as executor:
            executor.submit(self._send_blocking, event).result()

    def _send_blocking(self, event: LogEvent) -> None:
        asyncio.run(self._create_and_send_message(event))

    async def write_async(self, event: LogEvent, cancel_event: Optional[CancellationSignal] = None) -> None:
        """Send a log event without blocking the event loop.

        Args:
            event: Log event to send
            cancel_event: Signal checked before the request is issued

        Raises:
            asyncio.CancelledError: If cancel_event was set before sending
            DeliveryFailure: If the webhook returned a non-success status
            TransportError: If the request could not be sent
            ConfigurationError: If the message card cannot be created
        """
        self._ensure_initialized()
        await self._create_and_send_message(event, cancel_event)

    def create_message(self, event: LogEvent) -> str:
        """Render the webhook payload for a log event."""
        self._ensure_initialized()

        application_name = self._application_name.render(event)
        environment = self._environment.render(event)

        if not self.config.include_event_properties:
            event = event.without_properties()

        return self.message_card.create_message(event, application_name, environment)

    async def _create_and_send_message(
        self,
        event: LogEvent,
        cancel_event: Optional[CancellationSignal] = None
    ) -> None:
        message = self.create_message(event)

        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError("Dispatch cancelled before sending")

        response = await self._send_message(message)
        if not response.is_success:
            logger.debug(f"Webhook answered {response.status_code} {response.reason_phrase}")
            raise DeliveryFailure(response.status_code, response.reason_phrase)

    async def _send_message(self, message: str) -> httpx.Response:
        """Post the message to the webhook using a client scoped to this call."""
        # Configured headers must not replace the fixed ones
        headers = httpx.Headers(self.config.headers)
        headers["Content-Type"] = "application/json"
        headers["User-Agent"] = USER_AGENT

        logger.debug(f"Posting {len(message)} bytes to {self.config.url}")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout_seconds),
                verify=self.config.verify_ssl,
                transport=self.transport
            ) as client:
                return await client.post(
                    self.config.url,
                    content=message.encode('utf-8'),
                    headers=headers
                )
        except httpx.RequestError as e:
            raise TransportError(f"Request error: {e}") from e

    def _ensure_initialized(self) -> None:
        if self.state == TargetState.UNINITIALIZED:
            raise TargetStateError("Target must be initialized before writing")
        if self.state == TargetState.DISPOSED:
            raise TargetStateError("Target has been closed")

    def __repr__(self):
        return f"MsTeamsTarget(url={self.config.url!r}, card={self.config.card_impl!r}, state={self.state.value})"
