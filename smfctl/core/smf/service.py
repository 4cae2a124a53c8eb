import collections.abc
import logging
import typing

import toolz

import smfctl
import smfctl.core
import smfctl.core.execution
import smfctl.core.smf
import smfctl.core.smf.parser

_LOGGER = logging.getLogger(__name__)


class Identifier:
    """
    Fault Managed Resource Identifier of a service, for example
    ``svc:/milestone/multi-user-server:default`` or
    ``lrc:/etc/rc2_d/S47pppd``.
    """

    def __init__(self, value):
        if isinstance(value, Identifier):
            value = str(value)
        elif (
            not isinstance(value, str)
            or len(value) == 0
            or value.startswith(smfctl.core.smf.OPTION_PREFIX)
        ):
            raise smfctl.core.smf.InvalidIdentifierError(value)

        self.__value = value

    def __str__(self):
        return self.__value

    def __repr__(self):
        return "Identifier({!r})".format(self.__value)

    def __eq__(self, other):
        if isinstance(other, (Identifier, str)):
            return str(self) == str(other)

        return NotImplemented

    def __hash__(self):
        return hash(self.__value)

    @property
    def scheme(self) -> typing.Optional[str]:
        (scheme, separator, _) = self.__value.partition(
            smfctl.core.smf.SCHEME_SEPARATOR
        )

        if len(separator) == 0:
            return None

        return scheme

    @property
    def service(self) -> str:
        value = self.__value

        if self.scheme is not None:
            value = value[len(self.scheme) + 1 :]

        if self.scheme == "svc":
            value = value.split(smfctl.core.smf.SCHEME_SEPARATOR, 1)[0]

        return value.lstrip("/")

    @property
    def instance(self) -> typing.Optional[str]:
        if self.scheme != "svc":
            return None

        segments = self.__value.split(smfctl.core.smf.SCHEME_SEPARATOR)
        if len(segments) < 3:
            return None

        return segments[2]

    def exists(self, executor=None, logger=None) -> bool:
        return self.open(executor, logger).exists()

    def open(self, executor=None, logger=None) -> "Handle":
        return Handle(self, executor, logger)


class Status:
    """
    State of a service as printed by ``svcs``. ``state`` is None when the
    token is not one of the known SMF states, ``token`` always holds it as
    printed, without the transition marker.
    """

    def __init__(
        self,
        state: typing.Optional["smfctl.core.smf.State"],
        date: str,
        transitioning: bool = False,
        token: typing.Optional[str] = None,
    ):
        if token is None:
            token = str(state)

        self.__state = state
        self.__date = date
        self.__transitioning = transitioning
        self.__token = token

    def __str__(self):
        return self.__token

    def __repr__(self):
        return "Status({!r}, {!r}, transitioning={})".format(
            self.__token,
            self.__date,
            self.__transitioning,
        )

    @property
    def state(self) -> typing.Optional["smfctl.core.smf.State"]:
        return self.__state

    @property
    def token(self) -> str:
        return self.__token

    @property
    def date(self) -> str:
        return self.__date

    @property
    def transitioning(self) -> bool:
        return self.__transitioning

    def is_online(self) -> bool:
        return self.__state == smfctl.core.smf.State.ONLINE

    @classmethod
    def parse(cls, line: "smfctl.core.smf.parser.StatusLine") -> "Status":
        token = line.state
        transitioning = token.endswith(smfctl.core.smf.TRANSITION_MARKER)
        if transitioning:
            token = token[: -len(smfctl.core.smf.TRANSITION_MARKER)]

        state = None
        if token in set(map(lambda x: x.value, smfctl.core.smf.State)):
            state = smfctl.core.smf.State(token)

        return cls(state, line.date, transitioning, token)


class Property:
    def __init__(self, name: str, type_: str, value: str):
        self.__name = name
        self.__type = type_
        self.__value = value

    def __repr__(self):
        return "Property({!r}, {!r}, {!r})".format(
            self.__name,
            self.__type,
            self.__value,
        )

    def __eq__(self, other):
        if not isinstance(other, Property):
            return NotImplemented

        return (self.name, self.type, self.value) == (
            other.name,
            other.type,
            other.value,
        )

    @property
    def name(self) -> str:
        return self.__name

    @property
    def type(self) -> str:
        return self.__type

    @property
    def value(self) -> str:
        return self.__value

    @property
    def group(self) -> str:
        return self.__name.split(smfctl.core.smf.PROPERTY_SEPARATOR, 1)[0]


class Properties(collections.abc.Mapping):
    def __init__(self, properties: typing.Iterable[Property] = ()):
        self.__data: typing.Dict[str, Property] = {}

        for entry in properties:
            self.__data[entry.name] = entry

    def __getitem__(self, name: str) -> Property:
        return self.__data[name]

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self.__data)

    def __len__(self) -> int:
        return len(self.__data)

    @property
    def groups(self) -> typing.Dict[str, typing.List[Property]]:
        return toolz.groupby(lambda x: x.group, self.__data.values())

    def group(self, name: str) -> "Properties":
        return Properties(self.groups.get(name, []))


class Handle:
    """
    One SMF service. Every call runs the underlying command again, nothing is
    cached between calls.

    The action methods only make sure that ``svcadm`` could be started. Whether
    SMF accepted the request is not checked, so callers have to look at
    ``status()`` afterwards.
    """

    def __init__(
        self,
        identifier: typing.Union[str, Identifier],
        executor: typing.Optional["smfctl.core.execution.Executor"] = None,
        logger: typing.Optional[logging.Logger] = None,
    ):
        if logger is None:
            logger = _LOGGER

        if executor is None:
            executor = smfctl.core.execution.Executor(logger=logger)

        self.__identifier = Identifier(identifier)
        self.__executor = executor
        self.__logger = logger

    def __str__(self):
        return str(self.__identifier)

    def __repr__(self):
        return "Handle({!r})".format(str(self.__identifier))

    @property
    def identifier(self) -> Identifier:
        return self.__identifier

    @property
    def executor(self) -> "smfctl.core.execution.Executor":
        return self.__executor

    def status(self) -> Status:
        lines = self.__executor.read(
            self.__executor.commands.status,
            "-aH",
            str(self.__identifier),
        )

        for line in smfctl.core.smf.parser.parse_status_lines(lines):
            return Status.parse(line)

        raise smfctl.core.smf.NotExistsError(self.__identifier)

    def exists(self) -> bool:
        try:
            self.status()
            return True
        except smfctl.core.smf.NotExistsError:
            return False

    def properties(self) -> Properties:
        lines = self.__executor.read(
            self.__executor.commands.properties,
            str(self.__identifier),
        )

        return Properties(
            map(
                lambda x: Property(x.name, x.type, x.value),
                smfctl.core.smf.parser.parse_property_lines(lines),
            )
        )

    def _lookup(self, name: str) -> typing.Optional[Property]:
        properties = self.properties()

        if name not in properties:
            self.__logger.warning(
                "Unable to find property '%s' for %s",
                name,
                self.__identifier,
            )
            return None

        return properties[name]

    def property(self, name: str) -> typing.Optional[str]:
        entry = self._lookup(name)
        if entry is None:
            return None

        return entry.value

    def property_type(self, name: str) -> typing.Optional[str]:
        entry = self._lookup(name)
        if entry is None:
            return None

        return entry.type

    def _administer(self, *arguments) -> int:
        return self.__executor.execute(
            self.__executor.commands.administration,
            *arguments,
            str(self.__identifier),
        )

    def enable(self):
        self._administer("enable")

    def start(self):
        self._administer("enable", "-t")

    def disable(self):
        self._administer("disable")

    def stop(self):
        self._administer("disable", "-t")

    def refresh(self):
        self._administer("refresh")

    def restart(self):
        self._administer("restart")

    def clear(self):
        self._administer("clear")

    def mark(
        self,
        state: "smfctl.core.smf.MarkState" = smfctl.core.smf.MarkState.MAINTENANCE,
        immediate: bool = False,
        temporary: bool = False,
    ):
        flags = []

        if immediate:
            flags.append("-I")

        if temporary:
            flags.append("-t")

        self._administer("mark", *flags, str(smfctl.core.smf.MarkState(state)))
