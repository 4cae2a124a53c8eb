import functools
import logging
import pathlib
import typing

import click
import rich
import rich.console
import rich.logging
import rich.markup
import rich.table

import smfctl
import smfctl.core
import smfctl.core.configuration
import smfctl.core.execution
import smfctl.core.smf
import smfctl.core.smf.directory

_LOGGER = logging.getLogger("smfctl")

_ERRORS = (
    smfctl.core.configuration.Error,
    smfctl.core.execution.Error,
    smfctl.core.smf.Error,
)

_pass_directory = click.make_pass_decorator(smfctl.core.smf.directory.Directory)


def _errors(function):
    @functools.wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except _ERRORS as error:
            raise click.ClickException(str(error)) from error

    return wrapper


def _configure_logging(verbose: bool):
    _LOGGER.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(x, rich.logging.RichHandler) for x in _LOGGER.handlers):
        _LOGGER.addHandler(
            rich.logging.RichHandler(
                console=rich.console.Console(stderr=True),
                show_path=False,
            )
        )


@click.option(
    "--configuration",
    "-c",
    "configuration",
    envvar="SMFCTL_CONFIGURATION",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    default=None,
    help="YAML file with search path and command names.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose",
    is_flag=True,
    help="Log every command that is run.",
)
@click.group()
@click.pass_context
@_errors
def main(
    ctx: click.Context,
    configuration: typing.Optional[pathlib.Path],
    verbose: bool,
):
    _configure_logging(verbose)

    if ctx.obj is None:
        ctx.obj = smfctl.core.smf.directory.Directory(
            smfctl.core.execution.Executor(
                smfctl.core.configuration.load(configuration),
                _LOGGER,
            ),
            _LOGGER,
        )


def _state(status: "smfctl.core.smf.service.Status") -> str:
    if status.transitioning:
        return "{}{}".format(status, smfctl.core.smf.TRANSITION_MARKER)

    return str(status)


@main.command(name="list", help="List services matching a pattern.")
@click.argument(
    "pattern",
    default=smfctl.core.smf.DEFAULT_PATTERN,
)
@_pass_directory
@_errors
def _list(
    directory: "smfctl.core.smf.directory.Directory",
    pattern: str,
):
    table = rich.table.Table()

    table.add_column("State", no_wrap=True)
    table.add_column("Since", no_wrap=True)
    table.add_column("FMRI", no_wrap=True)

    for (handle, status) in directory.statuses(pattern):
        table.add_row(
            *map(
                rich.markup.escape,
                [_state(status), status.date, str(handle.identifier)],
            )
        )

    rich.console.Console().print(table)


@main.command(name="status", help="Show the state of a service.")
@click.argument("fmri")
@_pass_directory
@_errors
def _status(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
):
    status = directory.open(fmri).status()
    print("{} {}".format(_state(status), status.date))


@main.command(name="properties", help="Show the properties of a service.")
@click.option(
    "--group",
    "-g",
    "group",
    default=None,
    help="Only show properties of this property group.",
)
@click.argument("fmri")
@_pass_directory
@_errors
def _properties(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
    group: typing.Optional[str],
):
    properties = directory.open(fmri).properties()
    if group is not None:
        properties = properties.group(group)

    table = rich.table.Table()

    table.add_column("Name", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Value")

    for entry in properties.values():
        table.add_row(
            *map(rich.markup.escape, [entry.name, entry.type, entry.value])
        )

    rich.console.Console().print(table)


@main.command(name="property", help="Print the value of a property.")
@click.argument("fmri")
@click.argument("name")
@_pass_directory
@click.pass_context
@_errors
def _property(
    ctx: click.Context,
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
    name: str,
):
    value = directory.open(fmri).property(name)
    if value is None:
        ctx.exit(1)

    print(value)


@main.command(name="property-type", help="Print the type of a property.")
@click.argument("fmri")
@click.argument("name")
@_pass_directory
@click.pass_context
@_errors
def _property_type(
    ctx: click.Context,
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
    name: str,
):
    value = directory.open(fmri).property_type(name)
    if value is None:
        ctx.exit(1)

    print(value)


@main.command(name="enable", help="Enable a service.")
@click.option(
    "--temporary",
    "-t",
    "temporary",
    is_flag=True,
    help="Revert at next boot.",
)
@click.argument("fmri")
@_pass_directory
@_errors
def _enable(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
    temporary: bool,
):
    handle = directory.open(fmri)

    if temporary:
        handle.start()
    else:
        handle.enable()


@main.command(name="disable", help="Disable a service.")
@click.option(
    "--temporary",
    "-t",
    "temporary",
    is_flag=True,
    help="Revert at next boot.",
)
@click.argument("fmri")
@_pass_directory
@_errors
def _disable(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
    temporary: bool,
):
    handle = directory.open(fmri)

    if temporary:
        handle.stop()
    else:
        handle.disable()


@main.command(name="start", help="Enable a service until next boot.")
@click.argument("fmri")
@_pass_directory
@_errors
def _start(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
):
    directory.open(fmri).start()


@main.command(name="stop", help="Disable a service until next boot.")
@click.argument("fmri")
@_pass_directory
@_errors
def _stop(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
):
    directory.open(fmri).stop()


@main.command(name="refresh", help="Reload the configuration of a service.")
@click.argument("fmri")
@_pass_directory
@_errors
def _refresh(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
):
    directory.open(fmri).refresh()


@main.command(name="restart", help="Restart a service.")
@click.argument("fmri")
@_pass_directory
@_errors
def _restart(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
):
    directory.open(fmri).restart()


@main.command(name="clear", help="Clear the maintenance state of a service.")
@click.argument("fmri")
@_pass_directory
@_errors
def _clear(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
):
    directory.open(fmri).clear()


@main.command(name="mark", help="Mark a service as failed.")
@click.option(
    "--degraded",
    "degraded",
    is_flag=True,
    help="Mark as degraded instead of maintenance.",
)
@click.option(
    "--immediate",
    "-I",
    "immediate",
    is_flag=True,
    help="Do not wait for the service to stop.",
)
@click.option(
    "--temporary",
    "-t",
    "temporary",
    is_flag=True,
    help="Revert at next boot.",
)
@click.argument("fmri")
@_pass_directory
@_errors
def _mark(
    directory: "smfctl.core.smf.directory.Directory",
    fmri: str,
    degraded: bool,
    immediate: bool,
    temporary: bool,
):
    state = smfctl.core.smf.MarkState.MAINTENANCE
    if degraded:
        state = smfctl.core.smf.MarkState.DEGRADED

    directory.open(fmri).mark(state, immediate=immediate, temporary=temporary)


if __name__ == "__main__":
    main()
