"""
In-memory stand-in for the SMF commands, used by the test suites so they
run on hosts without ``svcs``, ``svcprop`` and ``svcadm``.
"""
import fnmatch
import typing

import smfctl
import smfctl.core
import smfctl.core.execution

_ACTION_STATES = {
    "enable": "online",
    "disable": "disabled",
    "clear": "online",
}


class FakeService:
    def __init__(
        self,
        identifier: str,
        state: str = "online",
        date: str = "10:32:05",
        properties: typing.Optional[typing.List[typing.Tuple[str, str, str]]] = None,
    ):
        self.identifier = identifier
        self.state = state
        self.date = date
        self.properties = list(properties or [])

    def set_property(self, name: str, type_: str, value: str):
        self.properties = list(filter(lambda x: x[0] != name, self.properties))
        self.properties.append((name, type_, value))


class FakeExecutor(smfctl.core.execution.Executor):
    def __init__(self, services: typing.Iterable[FakeService] = (), **kwargs):
        super().__init__(**kwargs)
        self.services = {x.identifier: x for x in services}
        self.calls: typing.List[typing.Tuple[str, ...]] = []

    def _match(self, pattern: str) -> typing.List[FakeService]:
        return list(
            filter(
                lambda x: any(
                    fnmatch.fnmatchcase(x.identifier, candidate)
                    for candidate in [
                        pattern,
                        "*/{}".format(pattern),
                        "*/{}:*".format(pattern),
                    ]
                ),
                self.services.values(),
            )
        )

    def read(self, command: str, *arguments) -> typing.List[str]:
        self.calls.append((command, *arguments))

        if command == self.commands.status:
            return list(
                map(
                    lambda x: "{:<13} {:>9} {}".format(x.state, x.date, x.identifier),
                    self._match(arguments[-1]),
                )
            )

        if command == self.commands.properties:
            service = self.services.get(arguments[-1])
            if service is None:
                return []

            return list(
                map(lambda x: " ".join(x).rstrip(" "), service.properties)
            )

        raise smfctl.core.execution.CommandNotFoundError(
            command,
            self.configuration.search_path,
        )

    def execute(self, command: str, *arguments) -> int:
        self.calls.append((command, *arguments))

        if command != self.commands.administration:
            raise smfctl.core.execution.CommandNotFoundError(
                command,
                self.configuration.search_path,
            )

        service = self.services.get(arguments[-1])
        if service is None:
            return 1

        action = arguments[0]
        temporary = "-t" in arguments[1:-1]

        if action == "mark":
            service.state = arguments[-2]
        elif action in _ACTION_STATES:
            service.state = _ACTION_STATES[action]

            if action != "clear" and not temporary:
                service.set_property(
                    "general/enabled",
                    "boolean",
                    "true" if action == "enable" else "false",
                )

        return 0
