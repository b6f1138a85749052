"""Result variants for the resolution steps of a render.

Each entry point of the view first *obtains* something (the current
template, a layout, a partial, a named section) and only then pushes a frame
and evaluates. The obtain step can end three ways, and the view branches on
which one it got instead of nesting ``try`` blocks around the whole render:

- ``Resolved``: the thing was found; rendering continues
- ``Passthrough``: the source is not templated; its text is the output
- ``Failed``: a recoverable error; ignored or sent to the error handler

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from strata.exceptions import PassthroughSource, StackUnderflowError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Resolved(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Passthrough:
    source: str


@dataclass(frozen=True, slots=True)
class Failed:
    error: Exception


Outcome = Resolved[T] | Passthrough | Failed


def attempt(step: Callable[[], T], *, catch: tuple[type[Exception], ...] = (Exception,)) -> Outcome[T]:
    """Run ``step`` and fold its exit into a result variant.

    Args:
        step: Zero-argument callable performing the resolution
        catch: Exception types folded into ``Failed``; anything else
            propagates. StackUnderflowError always propagates.

    Returns:
        ``Resolved(value)``, ``Passthrough(source)`` or ``Failed(error)``
    """
    try:
        return Resolved(step())
    except PassthroughSource as signal:
        return Passthrough(signal.source)
    except StackUnderflowError:
        raise
    except catch as error:
        return Failed(error)
