#!/usr/bin/env python3
"""
Command-line front end for the bolt normalizer and generator.

Usage:
    python tools/generate.py <subcommand> [options]

Subcommands:
    normalize [params_json]     Print the normalized parameter record
    argv [params_json]          Print the generator command line
    run [params_json]           Normalize, run the generator, check artifacts
    schema                      Print field metadata and defaults

Options:
    --schema-version <int>  Rule generation (default: BOLTGEN_SCHEMA_VERSION or 4)
    --debug                 Save <id>.resolved.json next to the artifacts (run)
    --qc                    Run STL QC on the generated meshes (run)
"""
import sys
import os
import json
import argparse
import logging
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from boltgen.config import load_settings
from boltgen.core.errors import BoltGeneratorError, GenerationFailure
from boltgen.export.generator import FastenerGenerator, build_argv
from boltgen.params.resolve import normalize
from boltgen.params.schema import PARAM_SCHEMA, get_schema
from boltgen.params.thread_sizes import THREAD_SIZES
from boltgen.qc import analyze_stl

logger = logging.getLogger("bolt-generator")


def _load_params(path):
    if not path:
        return {}
    with open(path, "r") as f:
        return json.load(f)


def _normalize_or_report(args):
    schema = get_schema(args.schema_version)
    result = normalize(_load_params(args.params_json), schema)
    if not result.ok:
        print(f"Rejected: {result.error.message}", file=sys.stderr)
        for field, reason in result.error.fields.items():
            print(f"  - {field}: {reason}", file=sys.stderr)
        return None
    return result.spec


def cmd_normalize(args):
    spec = _normalize_or_report(args)
    if spec is None:
        return 2
    print(json.dumps(spec.to_dict(), indent=2))
    return 0


def cmd_argv(args):
    spec = _normalize_or_report(args)
    if spec is None:
        return 2
    print(" ".join([args.settings.generator_bin] + build_argv(spec)))
    return 0


def cmd_run(args):
    spec = _normalize_or_report(args)
    if spec is None:
        return 2

    generator = FastenerGenerator(args.settings)
    try:
        generated = generator.run(spec)
    except GenerationFailure as e:
        print(f"Generation failed: {e.message}", file=sys.stderr)
        if e.stderr:
            print(e.stderr, file=sys.stderr)
        return 1

    print(f"\n=== Generation Complete ===")
    print(f"Identifier: {spec.filename}")
    for kind, path in generated.artifacts.items():
        print(f"{kind}: {path}")

    if args.debug:
        json_path = args.settings.artifact_path / f"{spec.filename}.resolved.json"
        with open(json_path, "w") as f:
            json.dump({"resolved_params": spec.to_dict(), "argv": build_argv(spec)}, f, indent=2)
        print(f"Debug JSON: {json_path}")

    status = 0
    if args.qc:
        parts = [("bolt", "stl")]
        if generated.nut_generated:
            parts.append(("nut", "nut_stl"))
        for part, kind in parts:
            qc = analyze_stl(generated.artifacts[kind], spec, part=part)
            print(f"QC {part}: {qc['status']}")
            for f in qc["failures"]:
                print(f"    - {f}")
            for w in qc["warnings"]:
                print(f"    ! {w}")
            if qc["status"] != "pass":
                status = 3
    return status


def cmd_schema(args):
    schema = get_schema(args.schema_version)
    print(json.dumps({
        "version": schema.version,
        "required": list(schema.required),
        "fields": PARAM_SCHEMA,
        "defaults": dict(schema.defaults),
        "argv": ["filename"] + list(schema.argv_fields),
        "threadSizes": list(THREAD_SIZES),
    }, indent=2))
    return 0


def build_parser(settings):
    parser = argparse.ArgumentParser(description="Bolt generator tool")
    parser.add_argument("--schema-version", type=int, default=settings.schema_version)
    sub = parser.add_subparsers(dest="command", required=True)

    for name, func in (("normalize", cmd_normalize), ("argv", cmd_argv), ("run", cmd_run)):
        p = sub.add_parser(name)
        p.add_argument("params_json", nargs="?", default=None)
        p.set_defaults(func=func)
        if name == "run":
            p.add_argument("--debug", action="store_true")
            p.add_argument("--qc", action="store_true")

    p = sub.add_parser("schema")
    p.set_defaults(func=cmd_schema)
    return parser


def main(argv=None):
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    args = build_parser(settings).parse_args(argv)
    args.settings = settings
    try:
        return args.func(args)
    except BoltGeneratorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
