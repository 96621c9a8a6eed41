"""Type aliases using modern PEP 695 syntax."""

from collections.abc import Awaitable, Callable

from dirsize.types.models import DirectoryEntry

# Predicate evaluated once per fully aggregated directory node
type DirectoryFilter = Callable[[DirectoryEntry], bool]

# Async per-item work function run by the bounded fan-out scheduler
type FanOutWork[T, R] = Callable[[T], Awaitable[R | None]]
