"""Gzip-compressed tar artifacts built from a project directory."""

from __future__ import annotations

import io
import logging
import os
import stat
import tarfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator

from hatchpack.constants import IGNORE_FILENAME, MAX_ARTIFACT_BYTES
from hatchpack.errors import (
    ArtifactTooLargeError,
    DirectoryNotFoundError,
    FileReadError,
)
from hatchpack.ignore.matcher import IgnoreMatcher
from hatchpack.schemas.artifact_models import ArchiveEntry, ArtifactStats
from hatchpack.schemas.enums import EntryKind
from hatchpack.security.path_validator import PathValidator, is_within

LOGGER = logging.getLogger(__name__)

EntryCallback = Callable[[ArchiveEntry], None]

_SPECIAL_TYPES = {
    stat.S_IFIFO: tarfile.FIFOTYPE,
    stat.S_IFCHR: tarfile.CHRTYPE,
    stat.S_IFBLK: tarfile.BLKTYPE,
}


@dataclass(frozen=True)
class Artifact:
    """Finished archive bytes plus walk statistics."""

    data: bytes
    stats: ArtifactStats

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.size_bytes / 1024 / 1024


class ArtifactBuilder:
    """Walk a validated root and stream kept entries into a tar.gz buffer.

    The walk is pre-order and sorted by name so entry membership is stable
    across runs. An excluded directory is never descended into. Symlinks are
    archived as links and never followed; links whose target leaves the
    root, or lands in a restricted directory, are skipped. Paths listed in
    ``skip_paths`` (such as the artifact being written) are never archived.
    """

    def __init__(
        self,
        matcher: IgnoreMatcher,
        *,
        validator: PathValidator | None = None,
        max_bytes: int = MAX_ARTIFACT_BYTES,
        compression_level: int = 9,
        on_entry: EntryCallback | None = None,
        skip_paths: Iterable[str | os.PathLike[str]] = (),
    ) -> None:
        self.matcher = matcher
        self.validator = validator or PathValidator()
        self.max_bytes = max_bytes
        self.compression_level = compression_level
        self.on_entry = on_entry
        self.skip_paths = frozenset(os.path.realpath(p) for p in skip_paths)

    def build(self, root_dir: str | os.PathLike[str]) -> Artifact:
        root = self._resolve_root(root_dir)
        stats = ArtifactStats()
        buffer = io.BytesIO()
        with tarfile.open(
            fileobj=buffer,
            mode="w:gz",
            compresslevel=self.compression_level,
            format=tarfile.PAX_FORMAT,
        ) as tar:
            for path, rel in self._walk(root, stats):
                self._add_entry(tar, root, path, rel, stats)

        data = buffer.getvalue()
        if len(data) > self.max_bytes:
            raise ArtifactTooLargeError(len(data), self.max_bytes)
        LOGGER.info(
            "Built artifact from %s: %d files, %d dirs, %d excluded, %d bytes",
            root,
            stats.files,
            stats.directories,
            stats.excluded,
            len(data),
        )
        return Artifact(data=data, stats=stats)

    def _resolve_root(self, root_dir: str | os.PathLike[str]) -> Path:
        root = self.validator.validate(root_dir)
        if not root.is_dir():
            raise DirectoryNotFoundError(f"directory not found: {os.fspath(root_dir)}")
        return root

    def _walk(self, root: Path, stats: ArtifactStats) -> Iterator[tuple[Path, str]]:
        # Children are pushed in reverse name order so pops yield sorted pre-order.
        pending: list[tuple[Path, str, bool]] = []
        self._push_children(pending, root, "", stats)
        while pending:
            path, rel, is_dir = pending.pop()
            yield path, rel
            if is_dir:
                self._push_children(pending, path, rel + "/", stats)

    def _push_children(
        self,
        pending: list[tuple[Path, str, bool]],
        directory: Path,
        prefix: str,
        stats: ArtifactStats,
    ) -> None:
        try:
            with os.scandir(directory) as scan:
                entries = sorted(scan, key=lambda item: item.name)
        except OSError as exc:
            raise FileReadError(directory, exc.strerror or str(exc)) from exc

        kept = []
        for entry in entries:
            rel = prefix + entry.name
            is_dir = entry.is_dir(follow_symlinks=False)
            if self.matcher.should_exclude(rel, is_dir):
                stats.excluded += 1
                continue
            if entry.path in self.skip_paths:
                LOGGER.debug("Skipping %s: output of this build", rel)
                stats.excluded += 1
                continue
            kept.append((Path(entry.path), rel, is_dir))
        pending.extend(reversed(kept))

    def _add_entry(
        self,
        tar: tarfile.TarFile,
        root: Path,
        path: Path,
        rel: str,
        stats: ArtifactStats,
    ) -> None:
        try:
            st = path.lstat()
        except OSError as exc:
            raise FileReadError(path, exc.strerror or str(exc)) from exc

        info = tarfile.TarInfo(rel)
        info.mode = stat.S_IMODE(st.st_mode)
        info.mtime = int(st.st_mtime)
        info.uid = st.st_uid
        info.gid = st.st_gid
        fmt = stat.S_IFMT(st.st_mode)

        if fmt == stat.S_IFREG:
            info.type = tarfile.REGTYPE
            info.size = st.st_size
            self._add_file(tar, path, info)
            stats.files += 1
            stats.uncompressed_bytes += st.st_size
            self._emit(info, EntryKind.FILE)
            return

        if fmt == stat.S_IFDIR:
            info.type = tarfile.DIRTYPE
            info.name = rel + "/"
            tar.addfile(info)
            stats.directories += 1
            self._emit(info, EntryKind.DIRECTORY)
            return

        if fmt == stat.S_IFLNK:
            try:
                linkname = os.readlink(path)
            except OSError as exc:
                raise FileReadError(path, exc.strerror or str(exc)) from exc
            rejection = self._link_rejection(root, path, linkname)
            if rejection is not None:
                LOGGER.warning("Skipping symlink %s: %s", rel, rejection)
                stats.skipped_symlinks += 1
                return
            info.type = tarfile.SYMTYPE
            info.linkname = linkname
            tar.addfile(info)
            stats.symlinks += 1
            self._emit(info, EntryKind.SYMLINK)
            return

        special = _SPECIAL_TYPES.get(fmt)
        if special is None:
            LOGGER.debug("Skipping socket %s", rel)
            return
        info.type = special
        if special != tarfile.FIFOTYPE:
            info.devmajor = os.major(st.st_rdev)
            info.devminor = os.minor(st.st_rdev)
        tar.addfile(info)
        stats.other += 1
        self._emit(info, EntryKind.OTHER)

    @staticmethod
    def _add_file(tar: tarfile.TarFile, path: Path, info: tarfile.TarInfo) -> None:
        try:
            with path.open("rb") as handle:
                tar.addfile(info, handle)
        except OSError as exc:
            raise FileReadError(path, exc.strerror or str(exc)) from exc

    def _link_rejection(self, root: Path, path: Path, linkname: str) -> str | None:
        """Return why a symlink must be skipped, or ``None`` to archive it."""
        target = os.path.realpath(os.path.join(path.parent, linkname))
        if not is_within(target, str(root)):
            return "target outside artifact root"
        blocked = self.validator.restricted_root(target)
        if blocked is not None:
            return f"target in restricted directory {blocked}"
        return None
    def _emit(self, info: tarfile.TarInfo, kind: EntryKind) -> None:
        if self.on_entry is None:
            return
        self.on_entry(
            ArchiveEntry(
                name=info.name,
                kind=kind,
                mode=info.mode,
                size=info.size,
                linkname=info.linkname or None,
            )
        )


def build_artifact(
    directory: str | os.PathLike[str],
    *,
    ignore_filename: str = IGNORE_FILENAME,
    compression_level: int = 9,
    validator: PathValidator | None = None,
    on_entry: EntryCallback | None = None,
    skip_paths: Iterable[str | os.PathLike[str]] = (),
) -> Artifact:
    """Validate ``directory``, load its ignore file and build the artifact."""
    active_validator = validator or PathValidator()
    root = active_validator.validate(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(f"directory not found: {os.fspath(directory)}")
    matcher = IgnoreMatcher.from_directory(root, filename=ignore_filename)
    builder = ArtifactBuilder(
        matcher,
        validator=active_validator,
        compression_level=compression_level,
        on_entry=on_entry,
        skip_paths=skip_paths,
    )
    return builder.build(root)
