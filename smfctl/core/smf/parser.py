"""
Line parsers for the output of ``svcs -H`` and ``svcprop``.

Lines which do not have the expected shape (headers, blank lines,
diagnostics) are skipped rather than reported.
"""
import re
import typing

import smfctl
import smfctl.core
import smfctl.core.smf

_STATUS_PATTERN = re.compile(
    r"""
    ^
    (\S+)           # state
    \s+
    (\S+)           # time the state was entered
    \s+
    ((?:{})\S+)     # identifier
    \s*
    $
    """.format(
        "|".join(
            map(
                lambda x: re.escape(x + smfctl.core.smf.SCHEME_SEPARATOR),
                smfctl.core.smf.SCHEMES,
            )
        )
    ),
    re.VERBOSE,
)

_PROPERTY_PATTERN = re.compile(
    r"""
    ^
    (\S*{}\S*)      # group/name
    \s+
    (\S+)           # type
    (?:\s(.*))?     # value, possibly empty or containing spaces
    $
    """.format(re.escape(smfctl.core.smf.PROPERTY_SEPARATOR)),
    re.VERBOSE,
)


class StatusLine(typing.NamedTuple):
    state: str
    date: str
    identifier: str


class PropertyLine(typing.NamedTuple):
    name: str
    type: str
    value: str


def parse_status_line(line: str) -> typing.Optional[StatusLine]:
    match = _STATUS_PATTERN.match(line.rstrip("\r\n"))
    if match is None:
        return None

    return StatusLine(*match.groups())


def parse_status_lines(lines: typing.Iterable[str]) -> typing.Iterator[StatusLine]:
    return filter(
        lambda x: x is not None,
        map(parse_status_line, lines),
    )


def parse_property_line(line: str) -> typing.Optional[PropertyLine]:
    match = _PROPERTY_PATTERN.match(line.rstrip("\r\n"))
    if match is None:
        return None

    (name, type_, value) = match.groups()

    if value is None:
        value = ""
    else:
        value = value.lstrip()

    return PropertyLine(name, type_, value)


def parse_property_lines(
    lines: typing.Iterable[str],
) -> typing.Iterator[PropertyLine]:
    return filter(
        lambda x: x is not None,
        map(parse_property_line, lines),
    )
