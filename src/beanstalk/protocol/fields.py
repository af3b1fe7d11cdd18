"""Protocol constants.

Keep these in one place to avoid stringly-typed reply handling.
"""

CRLF = b"\r\n"

# Reply shapes: how to interpret the block that may follow a status line.

NONE = "NONE"
BYTES = "BYTES"
MAP = "MAP"
LIST = "LIST"

SHAPES = frozenset((NONE, BYTES, MAP, LIST))

# Success statuses.

BURIED = "BURIED"
DELETED = "DELETED"
FOUND = "FOUND"
INSERTED = "INSERTED"
KICKED = "KICKED"
OK = "OK"
PAUSED = "PAUSED"
RELEASED = "RELEASED"
RESERVED = "RESERVED"
TOUCHED = "TOUCHED"
USING = "USING"
WATCHING = "WATCHING"

# Statuses a particular command may define as a normal negative outcome.

DEADLINE_SOON = "DEADLINE_SOON"
DRAINING = "DRAINING"
EXPECTED_CRLF = "EXPECTED_CRLF"
JOB_TOO_BIG = "JOB_TOO_BIG"
NOT_FOUND = "NOT_FOUND"
NOT_IGNORED = "NOT_IGNORED"
TIMED_OUT = "TIMED_OUT"

# Errors any command can receive.

BAD_FORMAT = "BAD_FORMAT"
INTERNAL_ERROR = "INTERNAL_ERROR"
OUT_OF_MEMORY = "OUT_OF_MEMORY"
UNKNOWN_COMMAND = "UNKNOWN_COMMAND"

# Known keywords that are not a success for every command. A reply outside
# the request's own sets but inside this one is a complete, well-formed line:
# the connection is still usable afterwards.

SERVER_ERRORS = frozenset((
    BAD_FORMAT,
    BURIED,
    DEADLINE_SOON,
    DRAINING,
    EXPECTED_CRLF,
    INTERNAL_ERROR,
    JOB_TOO_BIG,
    NOT_FOUND,
    NOT_IGNORED,
    OUT_OF_MEMORY,
    TIMED_OUT,
    UNKNOWN_COMMAND,
))

# Limits imposed by the server.

MAX_PRIORITY = 2**32 - 1
MAX_TUBE_NAME = 200

DEFAULT_PRIORITY = 1024
DEFAULT_DELAY = 0
DEFAULT_TTR = 120

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
