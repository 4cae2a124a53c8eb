import enum

SCHEMES = (
    "svc",
    "lrc",
)

SCHEME_SEPARATOR = ":"

PROPERTY_SEPARATOR = "/"

TRANSITION_MARKER = "*"

DEFAULT_PATTERN = "*"

OPTION_PREFIX = "-"


class Error(RuntimeError):
    pass


class InvalidIdentifierError(Error):
    def __init__(self, value):
        super().__init__("{!r} is not a valid service identifier".format(value))


class NotExistsError(Error, LookupError):
    def __init__(self, identifier):
        super().__init__("Unable to determine status of {}".format(identifier))
        self.__identifier = identifier

    @property
    def identifier(self):
        return self.__identifier


class InvalidPatternError(Error):
    def __init__(self, pattern):
        super().__init__("{!r} is not a valid service pattern".format(pattern))


class State(enum.Enum):
    UNINITIALIZED = "uninitialized"
    OFFLINE = "offline"
    ONLINE = "online"
    DEGRADED = "degraded"
    MAINTENANCE = "maintenance"
    DISABLED = "disabled"
    LEGACY_RUN = "legacy_run"

    def __str__(self):
        return self.value


class MarkState(enum.Enum):
    MAINTENANCE = "maintenance"
    DEGRADED = "degraded"

    def __str__(self):
        return self.value
