"""Convenience constructors for protocol requests, one per command.

Arguments are validated here, before anything touches a connection.
"""

from __future__ import annotations

import re
from typing import Optional, Union

from . import fields
from .fields import (
    BURIED, DEADLINE_SOON, DELETED, DRAINING, EXPECTED_CRLF, FOUND, INSERTED,
    JOB_TOO_BIG, KICKED, NOT_FOUND, NOT_IGNORED, OK, PAUSED, RELEASED,
    RESERVED, TIMED_OUT, TOUCHED, USING, WATCHING,
)
from .request import Request


_tube_name = re.compile(r"[A-Za-z0-9+/;.$_()][A-Za-z0-9\-+/;.$_()]*")


def _integer(name: str, value, maximum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be at most {maximum}: {value}")
    return value


def _priority(priority) -> int:
    return _integer("priority", priority, fields.MAX_PRIORITY)


def _tube(name) -> str:
    if not isinstance(name, str):
        raise TypeError(f"tube name must be a string, not {type(name).__name__}")
    if len(name) == 0 or len(name) > fields.MAX_TUBE_NAME:
        raise ValueError(f"tube name must be 1 to {fields.MAX_TUBE_NAME} characters: {name!r}")
    if _tube_name.fullmatch(name) is None:
        raise ValueError(f"invalid tube name: {name!r}")
    return name


def _body(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if data is None:
        raise TypeError("job data must not be None")
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"job data must be bytes or str, not {type(data).__name__}")


# Producer commands

def put(data, priority: int = fields.DEFAULT_PRIORITY, delay: int = fields.DEFAULT_DELAY,
        ttr: int = fields.DEFAULT_TTR) -> Request:
    body = _body(data)
    command = f"put {_priority(priority)} {_integer('delay', delay)} {_integer('ttr', ttr)} {len(body)}"
    return Request(command, ok=(INSERTED, BURIED), error=(JOB_TOO_BIG, DRAINING, EXPECTED_CRLF), payload=body)


def use(tube: str) -> Request:
    return Request(f"use {_tube(tube)}", ok=USING)


# Consumer commands

def reserve(timeout: Optional[int] = None) -> Request:
    if timeout is None:
        command = "reserve"
    else:
        command = f"reserve-with-timeout {_integer('timeout', timeout)}"

    # RESERVED <id> <bytes>
    return Request(command, ok=RESERVED, error=(DEADLINE_SOON, TIMED_OUT), shape=fields.BYTES, length_field=1)


def reserve_job(job_id: int) -> Request:
    return Request(f"reserve-job {_integer('job id', job_id)}", ok=RESERVED, error=NOT_FOUND,
                   shape=fields.BYTES, length_field=1)


def delete(job_id: int) -> Request:
    return Request(f"delete {_integer('job id', job_id)}", ok=DELETED, error=NOT_FOUND)


def release(job_id: int, priority: int = fields.DEFAULT_PRIORITY, delay: int = fields.DEFAULT_DELAY) -> Request:
    command = f"release {_integer('job id', job_id)} {_priority(priority)} {_integer('delay', delay)}"
    return Request(command, ok=RELEASED, error=(NOT_FOUND, BURIED))


def bury(job_id: int, priority: int = fields.DEFAULT_PRIORITY) -> Request:
    return Request(f"bury {_integer('job id', job_id)} {_priority(priority)}", ok=BURIED, error=NOT_FOUND)


def touch(job_id: int) -> Request:
    return Request(f"touch {_integer('job id', job_id)}", ok=TOUCHED, error=NOT_FOUND)


def watch(tube: str) -> Request:
    return Request(f"watch {_tube(tube)}", ok=WATCHING)


def ignore(tube: str) -> Request:
    return Request(f"ignore {_tube(tube)}", ok=WATCHING, error=NOT_IGNORED)


# Other commands

def peek(job_id: int) -> Request:
    return Request(f"peek {_integer('job id', job_id)}", ok=FOUND, error=NOT_FOUND,
                   shape=fields.BYTES, length_field=1)


def peek_ready() -> Request:
    return Request("peek-ready", ok=FOUND, error=NOT_FOUND, shape=fields.BYTES, length_field=1)


def peek_delayed() -> Request:
    return Request("peek-delayed", ok=FOUND, error=NOT_FOUND, shape=fields.BYTES, length_field=1)


def peek_buried() -> Request:
    return Request("peek-buried", ok=FOUND, error=NOT_FOUND, shape=fields.BYTES, length_field=1)


def kick(bound: int) -> Request:
    return Request(f"kick {_integer('bound', bound)}", ok=KICKED)


def kick_job(job_id: int) -> Request:
    return Request(f"kick-job {_integer('job id', job_id)}", ok=KICKED, error=NOT_FOUND)


def stats() -> Request:
    return Request("stats", ok=OK, shape=fields.MAP)


def stats_job(job_id: int) -> Request:
    return Request(f"stats-job {_integer('job id', job_id)}", ok=OK, error=NOT_FOUND, shape=fields.MAP)


def stats_tube(tube: str) -> Request:
    return Request(f"stats-tube {_tube(tube)}", ok=OK, error=NOT_FOUND, shape=fields.MAP)


def list_tubes() -> Request:
    return Request("list-tubes", ok=OK, shape=fields.LIST)


def list_tube_used() -> Request:
    return Request("list-tube-used", ok=USING)


def list_tubes_watched() -> Request:
    return Request("list-tubes-watched", ok=OK, shape=fields.LIST)


def pause_tube(tube: str, delay: int) -> Request:
    return Request(f"pause-tube {_tube(tube)} {_integer('delay', delay)}", ok=PAUSED, error=NOT_FOUND)
