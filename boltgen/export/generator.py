"""
Adapter for the external bolt generator executable.
The generator parses its arguments positionally with no names, so the order in
SchemaVersion.argv_fields is a hard contract.
"""
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from boltgen.config import Settings
from boltgen.core.errors import GenerationFailure
from boltgen.core.types import FastenerSpec
from boltgen.params.schema import LENGTH_FIELDS, get_schema

logger = logging.getLogger("bolt-generator")


def _format_arg(name: str, value, length_scale: float) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if name in LENGTH_FIELDS:
        value = value * length_scale
    return repr(float(value))


def build_argv(spec: FastenerSpec) -> List[str]:
    """Output identifier followed by every field of the spec's generation, in order."""
    schema = get_schema(spec.schema_version)
    values = spec.to_dict()
    return [spec.filename] + [
        _format_arg(name, values[name], schema.length_scale)
        for name in schema.argv_fields
    ]


def artifact_names(spec: FastenerSpec) -> Dict[str, str]:
    names = {
        "brep": f"{spec.filename}.brep",
        "stl": f"{spec.filename}.stl",
    }
    if spec.generate_nut:
        names["nut_brep"] = f"{spec.filename}_nut.brep"
        names["nut_stl"] = f"{spec.filename}_nut.stl"
    return names


@dataclass
class GenerationResult:
    filename: str
    artifacts: Dict[str, Path]
    stdout: str = ""

    @property
    def nut_generated(self) -> bool:
        return "nut_brep" in self.artifacts


class FastenerGenerator:
    """Runs the generator once per spec, bounded by a process timeout."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def command(self, spec: FastenerSpec) -> List[str]:
        return [self.settings.generator_bin] + build_argv(spec)

    def run(self, spec: FastenerSpec, timeout_s: Optional[float] = None) -> GenerationResult:
        """
        Invoke the generator and verify its artifacts.
        Raises GenerationFailure on launch error, timeout, non-zero exit or
        missing artifact files. Never retries.
        """
        timeout = timeout_s if timeout_s is not None else self.settings.timeout_s
        artifact_dir = self.settings.artifact_path
        artifact_dir.mkdir(parents=True, exist_ok=True)

        cmd = self.command(spec)
        logger.info("Executing generator: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=str(self.settings.work_dir),
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("Generator timed out after %ss for %s", timeout, spec.filename)
            raise GenerationFailure(
                f"Generator timed out after {timeout}s",
                stdout=_text(e.stdout),
                stderr=_text(e.stderr),
            ) from e
        except OSError as e:
            logger.error("Generator could not be started: %s", e)
            raise GenerationFailure(f"Generator could not be started: {e}") from e

        if result.returncode != 0:
            logger.error(
                "Generator exited with %s for %s\nstdout: %s\nstderr: %s",
                result.returncode,
                spec.filename,
                result.stdout,
                result.stderr,
            )
            raise GenerationFailure(
                f"Generator exited with status {result.returncode}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        artifacts = {
            kind: artifact_dir / name
            for kind, name in artifact_names(spec).items()
        }
        missing = [str(path) for path in artifacts.values() if not path.is_file()]
        if missing:
            logger.error("Generated files not found: %s\nstdout: %s", missing, result.stdout)
            raise GenerationFailure(
                "Generated files not found",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return GenerationResult(filename=spec.filename, artifacts=artifacts, stdout=result.stdout)


def _text(output) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
