"""Default Teams "MessageCard" layout."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import LogEvent, LogLevel
from .base import BaseMessageCard, register_card


THEME_COLORS: Dict[LogLevel, str] = {
    LogLevel.TRACE: "9E9E9E",
    LogLevel.DEBUG: "607D8B",
    LogLevel.INFO: "2196F3",
    LogLevel.WARN: "FF9800",
    LogLevel.ERROR: "F44336",
    LogLevel.FATAL: "8B0000",
}


class MessageCardFact(BaseModel):
    name: str
    value: str


class MessageCardSection(BaseModel):
    activity_title: str = Field(serialization_alias="activityTitle")
    activity_subtitle: Optional[str] = Field(default=None, serialization_alias="activitySubtitle")
    text: Optional[str] = None
    facts: List[MessageCardFact] = Field(default_factory=list)
    markdown: bool = True


class MessageCard(BaseModel):
    """Legacy Office 365 connector card understood by incoming webhooks."""

    type: str = Field(default="MessageCard", serialization_alias="@type")
    context: str = Field(default="https://schema.org/extensions", serialization_alias="@context")
    theme_color: str = Field(serialization_alias="themeColor")
    summary: str
    sections: List[MessageCardSection] = Field(default_factory=list)


@register_card("default")
class DefaultCard(BaseMessageCard):
    """Card with the application as title and the event details as facts."""

    def create_message(self, event: LogEvent, application_name: str, environment: str) -> str:
        card = MessageCard(
            theme_color=THEME_COLORS.get(event.level, THEME_COLORS[LogLevel.INFO]),
            summary=f"{application_name}: {event.level.value}",
            sections=[
                MessageCardSection(
                    activity_title=application_name,
                    activity_subtitle=f"{event.level.value} in {environment}",
                    text=event.message,
                    facts=self._build_facts(event, environment),
                )
            ],
        )
        return card.model_dump_json(by_alias=True, exclude_none=True)

    def _build_facts(self, event: LogEvent, environment: str) -> List[MessageCardFact]:
        facts = [
            MessageCardFact(name="Level", value=event.level.value),
            MessageCardFact(name="Environment", value=environment),
            MessageCardFact(name="Timestamp", value=event.timestamp.isoformat()),
        ]
        if event.logger_name:
            facts.append(MessageCardFact(name="Logger", value=event.logger_name))
        if event.exception:
            facts.append(MessageCardFact(name="Exception", value=event.exception))

        for name, value in event.properties.items():
            facts.append(MessageCardFact(name=str(name), value=self._format_value(value)))

        return facts

    @staticmethod
    def _format_value(value: Any) -> str:
        return "" if value is None else str(value)
