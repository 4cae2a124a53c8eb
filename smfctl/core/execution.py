import logging
import os
import shutil
import subprocess
import typing

import smfctl
import smfctl.core
import smfctl.core.configuration

_LOGGER = logging.getLogger(__name__)


class Error(RuntimeError):
    pass


class ExecutionError(Error):
    pass


class CommandNotFoundError(ExecutionError):
    def __init__(self, command, search_path):
        super().__init__(
            "Command {} not found in {}".format(
                command,
                os.pathsep.join(search_path),
            )
        )


class CommandNotStartedError(ExecutionError):
    def __init__(self, command, reason):
        super().__init__("Unable to run {}: {}".format(command, reason))


class Executor:
    """
    Runs the service management commands with an argument vector, looking
    them up only inside the configured search path.

    Neither ``read`` nor ``execute`` interprets the exit status of a
    command. Only a failure to start it is reported, as ExecutionError.
    """

    def __init__(
        self,
        configuration: typing.Optional[
            "smfctl.core.configuration.Configuration"
        ] = None,
        logger: typing.Optional[logging.Logger] = None,
    ):
        if configuration is None:
            configuration = smfctl.core.configuration.Configuration()

        if logger is None:
            logger = _LOGGER

        self.__configuration = configuration
        self.__logger = logger

    @property
    def configuration(self) -> "smfctl.core.configuration.Configuration":
        return self.__configuration

    @property
    def commands(self) -> "smfctl.core.configuration.Commands":
        return self.__configuration.commands

    @property
    def logger(self) -> logging.Logger:
        return self.__logger

    @property
    def path(self) -> str:
        return os.pathsep.join(self.__configuration.search_path)

    def resolve(self, command: str) -> str:
        resolved = shutil.which(command, path=self.path)
        if resolved is None:
            raise CommandNotFoundError(command, self.__configuration.search_path)

        return resolved

    def _environment(self) -> typing.Dict[str, str]:
        return {
            **os.environ,
            "PATH": self.path,
        }

    def _run(self, command: str, arguments, **kwargs) -> subprocess.CompletedProcess:
        argv = [self.resolve(command), *map(str, arguments)]
        self.__logger.debug("Running %s", argv)

        try:
            return subprocess.run(
                argv,
                check=False,
                stdin=subprocess.DEVNULL,
                env=self._environment(),
                **kwargs,
            )
        except OSError as error:
            raise CommandNotStartedError(command, error) from error

    def read(self, command: str, *arguments) -> typing.List[str]:
        result = self._run(
            command,
            arguments,
            text=True,
            errors="surrogateescape",
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )

        return result.stdout.splitlines()

    def execute(self, command: str, *arguments) -> int:
        result = self._run(
            command,
            arguments,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.STDOUT,
        )

        if result.returncode != 0:
            self.__logger.debug(
                "%s %s exited with status %d",
                command,
                " ".join(map(str, arguments)),
                result.returncode,
            )

        return result.returncode
