"""Global configuration: generator location, artifact paths, timeouts, schema generation."""

import os
from dataclasses import dataclass
from pathlib import Path

DEV = os.environ.get("ENV", "development").lower() in ("development", "dev", "test")

# Message returned to callers for any generator failure; details stay in logs
GENERATION_FAILED_MESSAGE = "Failed to generate bolt. Check parameters."


@dataclass(frozen=True)
class Settings:
    generator_bin: str = "./scim_bolts"
    work_dir: Path = Path(".")
    artifact_dir: Path = Path("Tests")
    timeout_s: float = 120.0
    schema_version: int = 4
    log_level: str = "INFO"

    @property
    def artifact_path(self) -> Path:
        """Artifact directory resolved against the generator working directory."""
        if self.artifact_dir.is_absolute():
            return self.artifact_dir
        return self.work_dir / self.artifact_dir


def load_settings() -> Settings:
    """Read settings from BOLTGEN_* environment variables."""
    env = os.environ
    return Settings(
        generator_bin=env.get("BOLTGEN_GENERATOR_BIN", Settings.generator_bin),
        work_dir=Path(env.get("BOLTGEN_WORK_DIR", ".")),
        artifact_dir=Path(env.get("BOLTGEN_ARTIFACT_DIR", "Tests")),
        timeout_s=float(env.get("BOLTGEN_TIMEOUT_S", Settings.timeout_s)),
        schema_version=int(env.get("BOLTGEN_SCHEMA_VERSION", Settings.schema_version)),
        log_level=env.get("BOLTGEN_LOG_LEVEL", Settings.log_level).upper(),
    )
