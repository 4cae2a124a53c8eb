import logging
import typing

import smfctl
import smfctl.core
import smfctl.core.execution
import smfctl.core.smf
import smfctl.core.smf.parser
import smfctl.core.smf.service

_LOGGER = logging.getLogger(__name__)


class Directory:
    """
    Lists the services known to SMF. Handles are returned in the order
    ``svcs`` printed them, and a pattern matching nothing gives an empty list.
    """

    def __init__(
        self,
        executor: typing.Optional["smfctl.core.execution.Executor"] = None,
        logger: typing.Optional[logging.Logger] = None,
    ):
        if logger is None:
            logger = _LOGGER

        if executor is None:
            executor = smfctl.core.execution.Executor(logger=logger)

        self.__executor = executor
        self.__logger = logger

    @property
    def executor(self) -> "smfctl.core.execution.Executor":
        return self.__executor

    def _lines(
        self,
        pattern: str,
    ) -> typing.Iterator["smfctl.core.smf.parser.StatusLine"]:
        if len(pattern) == 0 or pattern.startswith(smfctl.core.smf.OPTION_PREFIX):
            raise smfctl.core.smf.InvalidPatternError(pattern)

        return smfctl.core.smf.parser.parse_status_lines(
            self.__executor.read(
                self.__executor.commands.status,
                "-aH",
                pattern,
            )
        )

    def open(
        self,
        identifier: typing.Union[str, "smfctl.core.smf.service.Identifier"],
    ) -> "smfctl.core.smf.service.Handle":
        return smfctl.core.smf.service.Handle(
            identifier,
            self.__executor,
            self.__logger,
        )

    def list(
        self,
        pattern: str = smfctl.core.smf.DEFAULT_PATTERN,
    ) -> typing.List["smfctl.core.smf.service.Handle"]:
        return list(
            map(
                lambda x: self.open(x.identifier),
                self._lines(pattern),
            )
        )

    def statuses(
        self,
        pattern: str = smfctl.core.smf.DEFAULT_PATTERN,
    ) -> typing.List[
        typing.Tuple[
            "smfctl.core.smf.service.Handle",
            "smfctl.core.smf.service.Status",
        ]
    ]:
        return list(
            map(
                lambda x: (
                    self.open(x.identifier),
                    smfctl.core.smf.service.Status.parse(x),
                ),
                self._lines(pattern),
            )
        )
