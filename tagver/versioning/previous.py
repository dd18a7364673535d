"""Previously released versions, from the tag history."""

from __future__ import annotations

from semantic_version import Version

from tagver.core.result import Err
from tagver.git.repository import Repository
from tagver.output.console import ConsoleProtocol, Style

from .model import DecorateVersion
from .semver import parse_release_tag, sort_versions

__all__ = ["PreviousVersionsResolver"]


def _no_decoration(version: Version) -> None:
    return None


class PreviousVersionsResolver:
    """List release tags as versions, ascending.

    Policy:
    - One `git tag -l` call; any failure means "no tags", never an error.
    - Tags outside the release grammar are skipped.
    - `decorate` is called once per version, in ascending order.
    """

    def __init__(
        self,
        repository: Repository,
        *,
        decorate: DecorateVersion | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._repository = repository
        self._decorate: DecorateVersion = decorate or _no_decoration
        self._console = console

    def resolve(self) -> tuple[Version, ...]:
        result = self._repository.list_tags()
        if isinstance(result, Err):
            self._note(f"no tags listed: {result.error.message}")
            return ()

        parsed: list[Version] = []
        for tag in result.value:
            version = parse_release_tag(tag)
            if version is None:
                self._note(f"skip tag (not a release version): {tag}")
                continue
            parsed.append(version)

        versions = tuple(sort_versions(parsed))
        for version in versions:
            self._decorate(version)
        return versions

    def _note(self, message: str) -> None:
        if self._console is not None:
            self._console.print(message, Style.DIM)
