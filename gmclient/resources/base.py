from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class Loadable(Protocol[T]):
    """A remote resource that can be filled in on demand."""

    @property
    def is_loaded(self) -> bool: ...

    async def load(self) -> T: ...
