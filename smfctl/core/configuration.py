import pathlib
import typing

import cerberus
from ruamel import yaml

DEFAULT_SEARCH_PATH = (
    "/bin",
    "/usr/bin",
    "/sbin",
    "/usr/sbin",
)

DEFAULT_STATUS_COMMAND = "svcs"
DEFAULT_PROPERTIES_COMMAND = "svcprop"
DEFAULT_ADMINISTRATION_COMMAND = "svcadm"

SCHEMA = {
    "search_path": {
        "type": "list",
        "empty": False,
        "default": list(DEFAULT_SEARCH_PATH),
        "schema": {
            "type": "string",
            "regex": "/.*",
        },
    },
    "commands": {
        "type": "dict",
        "default": {},
        "schema": {
            "status": {
                "type": "string",
                "empty": False,
                "default": DEFAULT_STATUS_COMMAND,
            },
            "properties": {
                "type": "string",
                "empty": False,
                "default": DEFAULT_PROPERTIES_COMMAND,
            },
            "administration": {
                "type": "string",
                "empty": False,
                "default": DEFAULT_ADMINISTRATION_COMMAND,
            },
        },
    },
}


class Error(RuntimeError):
    pass


class InvalidConfigurationError(Error):
    def __init__(self, errors, path=None):
        if path is None:
            message = "Invalid configuration: {}".format(errors)
        else:
            message = "Invalid configuration {}: {}".format(path, errors)

        super().__init__(message)
        self.__errors = errors

    @property
    def errors(self):
        return self.__errors


class Commands:
    def __init__(
        self,
        status: str = DEFAULT_STATUS_COMMAND,
        properties: str = DEFAULT_PROPERTIES_COMMAND,
        administration: str = DEFAULT_ADMINISTRATION_COMMAND,
    ):
        self.__status = status
        self.__properties = properties
        self.__administration = administration

    def __eq__(self, other):
        if not isinstance(other, Commands):
            return NotImplemented

        return (self.status, self.properties, self.administration) == (
            other.status,
            other.properties,
            other.administration,
        )

    @property
    def status(self) -> str:
        return self.__status

    @property
    def properties(self) -> str:
        return self.__properties

    @property
    def administration(self) -> str:
        return self.__administration


class Configuration:
    """
    Where the service management commands are looked up and what they
    are called. Never reads or modifies the PATH of the running process.
    """

    def __init__(
        self,
        search_path: typing.Optional[typing.Iterable[str]] = None,
        commands: typing.Optional[Commands] = None,
    ):
        if search_path is None:
            search_path = DEFAULT_SEARCH_PATH

        if commands is None:
            commands = Commands()

        self.__search_path = tuple(map(str, search_path))
        self.__commands = commands

    @property
    def search_path(self) -> typing.Tuple[str, ...]:
        return self.__search_path

    @property
    def commands(self) -> Commands:
        return self.__commands

    @classmethod
    def from_dict(
        cls,
        data: typing.Optional[typing.Mapping[str, typing.Any]],
        path: typing.Optional[pathlib.Path] = None,
    ) -> "Configuration":
        if data is None:
            data = {}

        validator = cerberus.Validator(SCHEMA)

        if not validator.validate(dict(data)):
            raise InvalidConfigurationError(validator.errors, path)

        document = validator.document

        return cls(
            document["search_path"],
            Commands(**document["commands"]),
        )


def load(
    path: typing.Optional[typing.Union[str, pathlib.Path]] = None,
) -> Configuration:
    if path is None:
        return Configuration()

    path = pathlib.Path(path)
    if not path.exists():
        return Configuration()

    try:
        data = yaml.YAML(typ="safe").load(path)
    except yaml.YAMLError as error:
        raise InvalidConfigurationError(str(error), path) from error

    if data is not None and not isinstance(data, dict):
        raise InvalidConfigurationError("document must be a mapping", path)

    return Configuration.from_dict(data, path)
