"""Filesystem media store for uploaded images and videos."""

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

import aiofiles

from media_auth.domain.auth import StoredMedia, UploadedMedia
from media_auth.services.auth import MediaStore

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
NAME_PREFIX_LIMIT = 99999


@dataclass
class LocalMediaStore(MediaStore):
    """Writes media to ``<root>/<kind>/<random prefix><original name>``.

    Names are created exclusively; when a generated name is already taken
    a new prefix is drawn, up to ``max_name_attempts`` times.
    """

    root: Path
    max_name_attempts: int = 5
    rng: random.Random = field(default_factory=random.Random)
    kinds: tuple[str, ...] = ("image", "video")

    def __post_init__(self) -> None:
        for kind in self.kinds:
            (self.root / kind).mkdir(parents=True, exist_ok=True)

    async def save(self, kind: str, media: UploadedMedia) -> StoredMedia:
        """Stream the upload to disk and return its generated name."""
        if kind not in self.kinds:
            raise ValueError(f"Unknown media kind: {kind}")
        directory = self.root / kind
        original = _safe_basename(media.filename)
        for _ in range(self.max_name_attempts):
            name = f"{self.rng.randrange(NAME_PREFIX_LIMIT)}{original}"
            path = directory / name
            try:
                handle = await aiofiles.open(path, "xb")
            except FileExistsError:
                logger.info("Generated media name collided: %s", name)
                continue
            try:
                try:
                    while chunk := await media.stream.read(CHUNK_SIZE):
                        await handle.write(chunk)
                finally:
                    await handle.close()
            except BaseException:
                path.unlink(missing_ok=True)
                raise
            return StoredMedia(name=name, path=path)
        raise FileExistsError(
            f"No free {kind} name after {self.max_name_attempts} attempts"
        )


def _safe_basename(filename: str) -> str:
    """Return the final path component of a client supplied filename."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    return name or "upload"
