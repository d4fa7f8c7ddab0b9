"""Read-only lookup of generated artifacts by file name."""
from pathlib import Path

from boltgen.core.errors import ArtifactNotFound


class ArtifactStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def resolve(self, name: str, suffix: str = None) -> Path:
        """
        Path of an existing artifact. Names with path components, or with the
        wrong suffix when one is given, are reported as not found.
        """
        if not name or "\\" in name or name != Path(name).name or name in (".", ".."):
            raise ArtifactNotFound(name)
        if suffix is not None and not name.lower().endswith(suffix):
            raise ArtifactNotFound(name)
        path = self.root / name
        if not path.is_file():
            raise ArtifactNotFound(name)
        return path
