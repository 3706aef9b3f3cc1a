"""Command-line entry point: run a planning or review agent against a local project."""

import asyncio
import sys
from pathlib import Path

import click

from .agents.planning import IssueInput, PlanningCallbacks, PlanningPhase, run_planning_agent
from .agents.review import ReviewCallbacks, ReviewRequest, ReviewScope, ReviewTask, run_review_agent
from .platform.agent.llm_client import LiteLlmClient
from .platform.agent.messages import ProgressEvent
from .platform.observability import configure_logging, get_logger, initialize_bugsnag, metrics
from .platform.settings import Settings

logger = get_logger(__name__)


class Outcome:
    """Collects the terminal callback of a run."""

    def __init__(self):
        self.result = None
        self.error: str | None = None

    def on_complete(self, result):
        self.result = result

    def on_error(self, error: str):
        self.error = error


def _echo_progress(event: ProgressEvent) -> None:
    click.echo(event.message, err=True)


def _echo_phase(phase: PlanningPhase, progress: int) -> None:
    click.echo(f"[{phase}] {progress}%", err=True)


def _llm_client(settings: Settings) -> LiteLlmClient:
    return LiteLlmClient(
        api_key=settings.litellm.proxy_api_key,
        api_base=settings.litellm.proxy_api_base,
        temperature=settings.litellm.temperature,
    )


def _finish(ctx: click.Context, outcome: Outcome) -> None:
    if outcome.error is not None:
        click.echo(f"Error: {outcome.error}", err=True)
        ctx.exit(1)
    click.echo(outcome.result.model_dump_json(by_alias=True, indent=2))


def _parse_task(value: str) -> ReviewTask:
    title, sep, description = value.partition(":")
    if not sep:
        raise click.BadParameter(f"expected 'title: description', got {value!r}")
    return ReviewTask(title=title.strip(), description=description.strip())


@click.group()
@click.option("--print-metrics", is_flag=True, help="Print Prometheus metrics to stderr on exit.")
@click.pass_context
def main(ctx: click.Context, print_metrics: bool = False):
    settings = Settings()
    configure_logging(settings.log.level, settings.log.json_output)
    if settings.bugsnag is not None:
        initialize_bugsnag(settings.bugsnag.api_key, settings.bugsnag.release_stage)
    ctx.obj = settings

    if print_metrics:
        ctx.call_on_close(lambda: click.echo(metrics()[0].decode(), err=True))


@main.command()
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--title", required=True, help="Issue title.")
@click.option("--number", required=True, type=int, help="Issue number.")
@click.option("--body", default="", help="Issue body.")
@click.option("--body-file", type=click.File("r"), help="Read the issue body from a file.")
@click.option("--label", "labels", multiple=True, help="Issue label, may be repeated.")
@click.option("--url", default="", help="Issue URL.")
@click.pass_context
def plan(ctx, repo_path, title, number, body, body_file, labels, url):
    """Produce a phased implementation plan for an issue."""
    settings: Settings = ctx.obj
    issue = IssueInput(
        title=title,
        body=body_file.read() if body_file is not None else body,
        number=number,
        labels=list(labels),
        url=url,
    )
    outcome = Outcome()
    callbacks = PlanningCallbacks(
        on_progress=_echo_progress,
        on_phase_update=_echo_phase,
        on_complete=outcome.on_complete,
        on_error=outcome.on_error,
    )
    logger.info("plan_requested", issue=number, repo_path=str(repo_path))
    asyncio.run(run_planning_agent(issue, repo_path, callbacks, _llm_client(settings), settings))
    _finish(ctx, outcome)


@main.command()
@click.argument("project_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--scope",
    type=click.Choice([scope.value for scope in ReviewScope]),
    default=ReviewScope.PHASE.value,
    show_default=True,
)
@click.option("--phase-title")
@click.option("--phase-description")
@click.option("--task", "tasks", multiple=True, help="Task as 'title: description', may be repeated.")
@click.option("--file", "active_file", help="File under review, for the current_file scope.")
@click.option("--open-file", "open_files", multiple=True, help="Open file, for the open_files scope.")
@click.pass_context
def review(ctx, project_dir, scope, phase_title, phase_description, tasks, active_file, open_files):
    """Review the uncommitted changes of a project."""
    settings: Settings = ctx.obj
    request = ReviewRequest(
        scope=ReviewScope(scope),
        project_dir=project_dir,
        phase_title=phase_title,
        phase_description=phase_description,
        tasks=[_parse_task(task) for task in tasks],
        active_file_path=active_file,
        open_file_paths=list(open_files),
    )
    outcome = Outcome()
    callbacks = ReviewCallbacks(
        on_progress=_echo_progress,
        on_complete=outcome.on_complete,
        on_error=outcome.on_error,
    )
    logger.info("review_requested", scope=scope, project_dir=str(project_dir))
    asyncio.run(run_review_agent(request, callbacks, _llm_client(settings), settings))
    _finish(ctx, outcome)


if __name__ == "__main__":
    sys.exit(main())
