""" Lifecycle hooks are shell commands that run before and after a script. A failing hook never prevents a script
from running and never changes the exit code of `slapx`. """

from __future__ import annotations

import abc
import dataclasses
import enum
import logging
import typing as t
from pathlib import Path

from databind.core.settings import Alias, ExtraKeys

from slapx.executor import RECURSIVE_CALL_VARIABLE, EnvironmentPathOptions, ProcessExecutor
from slapx.util.cleo import escape

if t.TYPE_CHECKING:
    from slapx.arguments import InvocationRequest

logger = logging.getLogger(__name__)


class HookEvent(enum.Enum):
    PRE = "pre-run"
    POST = "post-run"

    @property
    def label(self) -> str:
        return "Pre" if self is HookEvent.PRE else "Post"


class HookError(Exception):
    """Raised by a #HookRunner if one or more hooks failed."""


@dataclasses.dataclass
@ExtraKeys(True)
class HooksConfig:
    #: Commands to run before the script.
    pre_run: t.Annotated[list[str], Alias("pre-run")] = dataclasses.field(default_factory=list)

    #: Commands to run after the script, regardless of its exit code.
    post_run: t.Annotated[list[str], Alias("post-run")] = dataclasses.field(default_factory=list)

    #: The name of an entrypoint in the `slapx.plugins.hook_runner` group to use instead of the
    #: #ConfiguredHookRunner.
    runner: str | None = None

    def get_commands(self, event: HookEvent) -> list[str]:
        return self.pre_run if event is HookEvent.PRE else self.post_run


class HookRunner(abc.ABC):
    """Base class for the component that runs the hooks of an event. Alternative implementations can be registered
    in the `slapx.plugins.hook_runner` entrypoint group and selected with the `hooks.runner` option."""

    ENTRYPOINT = "slapx.plugins.hook_runner"

    def __init__(
        self,
        config: HooksConfig,
        directory: Path,
        init_directory: Path,
        executor: ProcessExecutor,
        path_options: EnvironmentPathOptions | None = None,
    ) -> None:
        self.config = config
        self.directory = directory
        self.init_directory = init_directory
        self.executor = executor
        self.path_options = path_options

    @abc.abstractmethod
    def handle(self, event: HookEvent, debug: bool, ignore_hooks: bool) -> None:
        """Run the hooks for the *event*. Raise an exception if a hook failed.

        The *ignore_hooks* flag is part of the runner contract for callers that invoke a runner directly. When
        hooks are run through #run_hook_best_effort(), the runner is not called at all if hooks are ignored."""


class ConfiguredHookRunner(HookRunner):
    """Runs the commands configured in #HooksConfig one after another in the runner's directory. The output of the
    commands is only shown in debug mode. A failing command does not stop the commands following it, but a
    #HookError is raised after all of them ran."""

    def handle(self, event: HookEvent, debug: bool, ignore_hooks: bool) -> None:
        commands = self.config.get_commands(event)
        if not commands:
            return
        if ignore_hooks:
            logger.info("Skipping <subj>%s</subj> hooks since --ignore-hooks was specified", event.value)
            return

        logger.info("Executing <subj>%s</subj> hooks", event.value)
        failed: list[str] = []
        for command in commands:
            try:
                exit_code = self.executor.execute(
                    command,
                    self.directory,
                    self.init_directory,
                    self.path_options,
                    show_output=debug,
                )
            except OSError as exc:
                failed.append(f'"{command}" ({exc})')
            else:
                if exit_code != 0:
                    failed.append(f'"{command}" (exit code {exit_code})')

        if failed:
            message = f"{event.value} hooks failed: {', '.join(failed)}"
            if not debug:
                message += ". Run with --debug to see the output of the hooks."
            raise HookError(message)

        logger.info("<subj>%s</subj> hooks finished", event.value)


def load_hook_runner(
    config: HooksConfig,
    directory: Path,
    init_directory: Path,
    executor: ProcessExecutor,
    path_options: EnvironmentPathOptions | None = None,
) -> HookRunner:
    """Creates the #HookRunner selected by #HooksConfig.runner, or a #ConfiguredHookRunner if none is selected."""

    from slapx.util.plugins import load_entrypoint

    runner_type: type[HookRunner] = ConfiguredHookRunner
    if config.runner is not None:
        runner_type = load_entrypoint(HookRunner, config.runner)  # type: ignore[type-abstract]
    return runner_type(config, directory, init_directory, executor, path_options)


def hooks_suppressed(request: InvocationRequest, environ: t.Mapping[str, str]) -> bool:
    """Hooks are not run when they are ignored on the command-line, for help requests, or when `slapx` is invoked
    from a script that `slapx` is running."""

    return request.ignore_hooks or request.help or environ.get(RECURSIVE_CALL_VARIABLE) == "1"


def run_hook_best_effort(
    runner: t.Callable[[], HookRunner | None],
    event: HookEvent,
    request: InvocationRequest,
    environ: t.Mapping[str, str],
) -> None:
    """Runs the hooks of the *event* with the runner returned by the *runner* supplier. Any error, including one
    raised while creating the runner, is logged as a warning and not propagated."""

    if hooks_suppressed(request, environ):
        return

    try:
        hook_runner = runner()
        if hook_runner is not None:
            hook_runner.handle(event, request.debug, request.ignore_hooks)
    except Exception as exc:
        logger.warning(
            "<warning>%s hook error: %s</warning>",
            event.label,
            escape(str(exc) or type(exc).__name__),
            exc_info=request.debug,
        )
