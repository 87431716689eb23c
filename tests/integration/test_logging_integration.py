"""Integration tests from YAML configuration to webhook delivery."""

import json
import logging
from uuid import uuid4

import httpx
import pytest

from msteams_target import (
    LogEvent,
    LogLevel,
    MsTeamsHandler,
    MsTeamsTarget,
    load_target_config,
    load_variable_table,
)


CONFIG_YAML = """
url: https://hook.example/x
application_name: ${var:app}
environment: ${var:stage}
variables:
  app: Billing
  stage: prod (${logger})
"""


@pytest.fixture
def configured_target(tmp_path):
    """Target built from a YAML file, posting to a recording transport."""
    path = tmp_path / "msteams.yaml"
    path.write_text(CONFIG_YAML)

    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200)

    target = MsTeamsTarget(
        load_target_config(path, environment="production"),
        variables=load_variable_table(path),
        transport=httpx.MockTransport(handler),
    )
    return target, requests


def test_logging_error_reaches_webhook(configured_target):
    target, requests = configured_target
    logger = logging.getLogger(f"billing.{uuid4().hex[:8]}")
    logger.propagate = False
    handler = MsTeamsHandler(target)
    logger.addHandler(handler)

    try:
        logger.error("disk full", extra={"volume": "/dev/sda1"})
    finally:
        logger.removeHandler(handler)
        handler.close()

    assert len(requests) == 1
    assert str(requests[0].url) == "https://hook.example/x"

    section = json.loads(requests[0].content)["sections"][0]
    facts = {f["name"]: f["value"] for f in section["facts"]}
    assert section["activityTitle"] == "Billing"
    assert facts["Environment"] == f"prod ({logger.name})"
    assert facts["volume"] == "/dev/sda1"


@pytest.mark.asyncio
async def test_async_pipeline_delivery(configured_target):
    target, requests = configured_target
    target.initialize()

    await target.write_async(LogEvent(level=LogLevel.FATAL, message="out of memory", logger_name="worker"))

    section = json.loads(requests[0].content)["sections"][0]
    assert section["activitySubtitle"] == "Fatal in prod (worker)"
