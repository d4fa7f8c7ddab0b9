"""Shared test helpers: a stand-in generator executable and STL writers."""
import sys
from pathlib import Path

import numpy as np

from boltgen.config import Settings

# Records its arguments and writes artifacts the way the real generator does
# (Tests/<id>.brep, Tests/<id>.stl, plus _nut files when asked).
FAKE_GENERATOR = """#!{python}
import json
import sys
import time
from pathlib import Path

mode = {mode!r}
name = sys.argv[1]
out = Path("Tests")
if mode == "sleep":
    time.sleep(30)
if mode == "fail":
    sys.stderr.write("Fatal Error: BRep_API: command not done\\n")
    sys.exit(1)
(out / (name + ".args.json")).write_text(json.dumps(sys.argv[1:]))
if mode == "no_files":
    sys.exit(0)
for suffix in (".brep", ".stl"):
    (out / (name + suffix)).write_text("solid " + name)
# generateNut is the last field of the 12-field legacy order, argv[17] otherwise
nut_flag = sys.argv[13] if len(sys.argv) == 14 else sys.argv[17]
if nut_flag == "1" and mode != "no_nut":
    for suffix in ("_nut.brep", "_nut.stl"):
        (out / (name + suffix)).write_text("solid nut")
print("Bolt exported: Tests/" + name + ".brep")
"""


def fake_generator_settings(tmp_path: Path, mode: str = "ok") -> Settings:
    """Settings pointing at a stand-in generator. Modes: ok, fail, sleep, no_files, no_nut."""
    script = tmp_path / f"fake_generator_{mode}.py"
    script.write_text(FAKE_GENERATOR.format(python=sys.executable, mode=mode))
    script.chmod(0o755)
    return Settings(
        generator_bin=str(script),
        work_dir=tmp_path,
        artifact_dir=Path("Tests"),
        timeout_s=10.0,
    )


def box_triangles(x: float, y: float, z: float) -> np.ndarray:
    """12 triangles of an axis-aligned box centred on the z axis, base at z=0."""
    hx, hy = x / 2.0, y / 2.0
    v = np.array([
        [-hx, -hy, 0], [hx, -hy, 0], [hx, hy, 0], [-hx, hy, 0],
        [-hx, -hy, z], [hx, -hy, z], [hx, hy, z], [-hx, hy, z],
    ], dtype=np.float64)
    faces = [
        (0, 2, 1), (0, 3, 2), (4, 5, 6), (4, 6, 7),
        (0, 1, 5), (0, 5, 4), (1, 2, 6), (1, 6, 5),
        (2, 3, 7), (2, 7, 6), (3, 0, 4), (3, 4, 7),
    ]
    return v[np.array(faces)]


def write_binary_stl(path: Path, tris: np.ndarray) -> Path:
    record = np.dtype([
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attr", "<u2"),
    ])
    data = np.zeros(len(tris), dtype=record)
    data["vertices"] = tris
    with open(path, "wb") as f:
        f.write(b"\0" * 80)
        f.write(np.array(len(tris), dtype="<u4").tobytes())
        f.write(data.tobytes())
    return path


def write_ascii_stl(path: Path, tris: np.ndarray) -> Path:
    lines = ["solid test"]
    for tri in tris:
        lines.append("  facet normal 0 0 0")
        lines.append("    outer loop")
        for vx, vy, vz in tri:
            lines.append(f"      vertex {vx} {vy} {vz}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append("endsolid test")
    path.write_text("\n".join(lines))
    return path
