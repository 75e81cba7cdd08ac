from typing import Any, Optional, Protocol

from core import ProjectContainer


class ProjectRepository(Protocol):
    def load(self) -> Optional[ProjectContainer]:
        ...

    def save(self, container: ProjectContainer) -> None:
        ...


class KeySource(Protocol):
    """Raw terminal input consumed by the event source.

    ``read`` yields prompt_toolkit ``KeyPress`` objects, ``Resize`` markers and a
    final ``EndOfInput`` marker once the stream is exhausted.
    """

    def attach(self) -> None:
        ...

    def detach(self) -> None:
        ...

    async def read(self) -> Any:
        ...
