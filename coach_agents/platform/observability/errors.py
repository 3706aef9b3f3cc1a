"""Bugsnag error reporting for failed agent runs.

Unexpected run failures are logged at ERROR level; the handler installed
here forwards those records to Bugsnag, tagged with the run ID.
"""

import logging

import bugsnag
from bugsnag.handlers import BugsnagHandler

from coach_agents.platform.observability.logging import run_id_ctx


def _attach_run_id(event) -> None:
    run_id = run_id_ctx.get()
    if run_id is not None:
        event.add_tab("agent_run", {"run_id": run_id})


def initialize_bugsnag(api_key: str, release_stage: str) -> bool:
    """Forward ERROR-level log records to Bugsnag.

    Does nothing for the "local" release stage.

    Args:
        api_key: Bugsnag project API key
        release_stage: "development", "production" or "local"

    Returns:
        True if reporting was enabled
    """
    if release_stage == "local":
        return False

    bugsnag.configure(api_key=api_key, release_stage=release_stage, auto_notify=True)
    bugsnag.before_notify(_attach_run_id)

    handler = BugsnagHandler()
    handler.setLevel(logging.ERROR)
    logging.getLogger().addHandler(handler)
    return True
