"""Store-call requests and the drivers that execute them.

History steps are generators: they yield one store-call request per I/O
boundary and receive its result (or its ``ChronodocError``, thrown back in
at the yield point). ``run_steps`` executes them against a blocking store,
``run_steps_async`` awaits them on an awaitable store. The step logic is
written once and serves both scheduling modes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator, TypeVar, Union

from core.errors import ChronodocError
from store.base import AsyncJsonStore, JsonStore

T = TypeVar("T")


@dataclass(frozen=True)
class ReadJson:
    """Read the JSON value at ``path``."""

    path: str


@dataclass(frozen=True)
class WriteJson:
    """Overwrite the JSON value at ``path``."""

    path: str
    payload: Any


@dataclass(frozen=True)
class ListNames:
    """List entry names inside ``directory``."""

    directory: str


@dataclass(frozen=True)
class EnsureDir:
    """Create ``directory`` when missing."""

    directory: str


StoreCall = Union[ReadJson, WriteJson, ListNames, EnsureDir]
Steps = Generator[StoreCall, Any, T]


def run_steps(steps: Steps[T], store: JsonStore) -> T:
    """Drive history steps against a blocking store.

    Args:
        steps: Step generator to execute.
        store: Blocking store that serves each request.

    Returns:
        The value the step generator returns.
    """
    try:
        call = next(steps)
        while True:
            try:
                result = _dispatch(store, call)
            except ChronodocError as error:
                call = steps.throw(error)
            else:
                call = steps.send(result)
    except StopIteration as stop:
        return stop.value


async def run_steps_async(steps: Steps[T], store: AsyncJsonStore) -> T:
    """Drive history steps against an awaitable store.

    Args:
        steps: Step generator to execute.
        store: Awaitable store that serves each request.

    Returns:
        The value the step generator returns.
    """
    try:
        call = next(steps)
        while True:
            try:
                result = await _dispatch_async(store, call)
            except ChronodocError as error:
                call = steps.throw(error)
            else:
                call = steps.send(result)
    except StopIteration as stop:
        return stop.value


def _dispatch(store: JsonStore, call: StoreCall) -> Any:
    if isinstance(call, ReadJson):
        return store.read_json(call.path)
    if isinstance(call, WriteJson):
        return store.write_json(call.path, call.payload)
    if isinstance(call, ListNames):
        return store.list_names(call.directory)
    if isinstance(call, EnsureDir):
        return store.ensure_dir(call.directory)
    raise TypeError(f"Unsupported store call: {call!r}")


async def _dispatch_async(store: AsyncJsonStore, call: StoreCall) -> Any:
    if isinstance(call, ReadJson):
        return await store.read_json(call.path)
    if isinstance(call, WriteJson):
        return await store.write_json(call.path, call.payload)
    if isinstance(call, ListNames):
        return await store.list_names(call.directory)
    if isinstance(call, EnsureDir):
        return await store.ensure_dir(call.directory)
    raise TypeError(f"Unsupported store call: {call!r}")
