"""Lookup orchestration: fan out to sources and reduce to one verdict per package."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from sources.base import Source
from .cache import VersionCache
from .compare import is_newer, pick_newest
from .models import LookupMode, LookupRequest, PackageResult, VersionInfo

logger = logging.getLogger(__name__)


def query_source(
    source: Source,
    package: str,
    use_cache: bool,
    cache: Optional[VersionCache],
) -> Optional[str]:
    """Ask one source for ``package``, going through the cache for registries.

    Local sources describe this machine and are always queried directly.
    Only successful answers are written back; a miss is never cached.
    Exceptions raised by a source are logged and treated as "no answer".
    """
    cacheable = use_cache and cache is not None and not source.is_local
    if cacheable:
        cached = cache.get(source.name, package)
        if cached is not None:
            return cached

    try:
        with Timer() as t:
            version = source.query_version(package)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.debug(
            "Source %s raised while querying %s: %s",
            source.name,
            package,
            exc,
            extra=extra_context(event="source_query", component="lookup", outcome="exception",
                                source=source.name, package=package),
        )
        return None

    if is_debug_enabled(logger):
        logger.debug(
            "Queried %s for %s",
            source.name,
            package,
            extra=extra_context(event="source_query", component="lookup",
                                outcome="found" if version else "absent", source=source.name,
                                package=package, duration_ms=t.duration_ms()),
        )

    if version and cacheable:
        cache.set(source.name, package, version)
    return version or None


class LookupService:
    """Resolves packages against sources in one of the three lookup modes."""

    def __init__(
        self,
        cache: Optional[VersionCache] = None,
        use_cache: bool = True,
        max_workers: Optional[int] = None,
        max_packages: int = Constants.MAX_PARALLEL_PACKAGES,
    ):
        """Initialize the service.

        Args:
            cache: Version cache for registry answers; a default one is built
                when ``use_cache`` is set and none is given.
            use_cache: Read and write the cache for non-local sources.
            max_workers: Upper bound on threads per source fan-out.
            max_packages: Upper bound on packages resolved at once by
                ``lookup_many``.
        """
        self.use_cache = use_cache
        self.cache = cache if cache is not None or not use_cache else VersionCache()
        self.max_workers = max_workers
        self.max_packages = max(1, max_packages)

    def _workers(self, count: int) -> int:
        return max(1, min(count, self.max_workers) if self.max_workers else count)

    def _query_all(self, sources: Sequence[Source], package: str) -> List[Optional[str]]:
        """Query every source concurrently; results align with ``sources``."""
        if not sources:
            return []
        with ThreadPoolExecutor(max_workers=self._workers(len(sources))) as executor:
            futures = [
                executor.submit(query_source, source, package, self.use_cache, self.cache)
                for source in sources
            ]
            return [future.result() for future in futures]

    def _answers(self, sources: Sequence[Source], package: str) -> List[VersionInfo]:
        return [
            VersionInfo(version=version, source=source.name, local=source.is_local)
            for source, version in zip(sources, self._query_all(sources, package))
            if version
        ]

    def lookup(self, package: str, sources: Sequence[Source], mode: LookupMode) -> PackageResult:
        """Resolve ``package`` against ``sources`` (in precedence order).

        Args:
            package: Package name as understood by the sources.
            sources: Sources to consult; ordering breaks every tie.
            mode: ALL lists every answer, EXPLICIT takes the first answer,
                DEFAULT compares the installed copy to same-ecosystem registries.

        Returns:
            PackageResult: The verdict. An empty ``sources`` gives not_found.
        """
        sources = list(sources)
        with Timer() as t:
            if not sources:
                result = PackageResult.not_found(package)
            elif mode == LookupMode.ALL:
                result = PackageResult.found(package, self._answers(sources, package))
            elif mode == LookupMode.EXPLICIT:
                answers = self._answers(sources, package)
                result = PackageResult.up_to_date(package, answers[0]) if answers else PackageResult.not_found(package)
            else:
                result = self._lookup_default(package, sources)

        logger.debug(
            "Resolved %s: %s",
            package,
            result.status.value,
            extra=extra_context(event="lookup", component="lookup", action=mode.value,
                                outcome=result.status.value, package=package,
                                duration_ms=t.duration_ms()),
        )
        return result

    def _lookup_default(self, package: str, sources: List[Source]) -> PackageResult:
        local = [s for s in sources if s.is_local]
        remote = [s for s in sources if not s.is_local]

        installed_source: Optional[Source] = None
        installed: Optional[VersionInfo] = None
        for source, version in zip(local, self._query_all(local, package)):
            if version:
                installed_source = source
                installed = VersionInfo(version=version, source=source.name, local=True)
                break

        registry = [
            (source, version)
            for source, version in zip(remote, self._query_all(remote, package))
            if version
        ]

        if installed is not None and installed_source is not None:
            ecosystem = installed_source.ecosystem
            newer = [
                (source, version)
                for source, version in registry
                if source.ecosystem == ecosystem and is_newer(installed.version, version)
            ]
            also_found_in = [source.name for source, _ in registry if source.ecosystem != ecosystem]
            best = pick_newest(newer, key=lambda item: item[1])
            if best is not None:
                latest = VersionInfo(version=best[1], source=best[0].name)
                return PackageResult.outdated(package, installed, latest, also_found_in)
            return PackageResult.current(package, installed, also_found_in)

        if registry:
            return PackageResult.not_installed(
                package, [VersionInfo(version=version, source=source.name) for source, version in registry]
            )
        return PackageResult.not_found(package)

    def lookup_many(self, requests: Sequence[LookupRequest]) -> List[PackageResult]:
        """Resolve several packages concurrently; output order matches input order."""
        requests = list(requests)
        if not requests:
            return []
        with ThreadPoolExecutor(max_workers=min(len(requests), self.max_packages)) as executor:
            futures = [executor.submit(self.lookup, req.package, req.sources, req.mode) for req in requests]
            return [future.result() for future in futures]
