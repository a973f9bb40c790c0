"""
Determinism guard (static check).

Same seed must mean same board, same planes and same ledger, so simulation code
may not read the wall clock or draw from an unseeded source.

What we flag (in simulation code):
- Wall-clock time: time.time(), time.monotonic(), time.perf_counter(), datetime.now(), pygame.time.get_ticks()
- Unseeded randomness: random.*, `from random import ...`, os.urandom(), uuid.uuid4(), secrets.*
- Python's hash() (process-randomized for str)

We DO NOT scan:
- planar/sim/** (the seeded stream and sim clock live there)
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]


DEFAULT_SCAN_DIRS = [
    PROJECT_ROOT / "planar" / "entities",
    PROJECT_ROOT / "planar" / "procgen",
    PROJECT_ROOT / "planar" / "systems",
    PROJECT_ROOT / "planar" / "board.py",
    PROJECT_ROOT / "planar" / "engine.py",
]

DEFAULT_EXCLUDE_DIRS = [
    PROJECT_ROOT / "planar" / "sim",
]

SIM_TIME_HINT = "use SimClock / dt accumulation (planar.sim.timebase)"
SEEDED_HINT = "use a seeded stream (planar.sim.determinism.get_stream)"

# (call chain prefix, kind, hint). A chain matches when it starts with the prefix.
CALL_RULES: list[tuple[tuple[str, ...], str, str]] = [
    (("pygame", "time", "get_ticks"), "wall_clock_time", SIM_TIME_HINT),
    (("time", "time"), "wall_clock_time", SIM_TIME_HINT),
    (("time", "monotonic"), "wall_clock_time", SIM_TIME_HINT),
    (("time", "perf_counter"), "wall_clock_time", SIM_TIME_HINT),
    (("datetime", "now"), "wall_clock_time", SIM_TIME_HINT),
    (("datetime", "utcnow"), "wall_clock_time", SIM_TIME_HINT),
    (("datetime", "datetime", "now"), "wall_clock_time", SIM_TIME_HINT),
    (("datetime", "datetime", "utcnow"), "wall_clock_time", SIM_TIME_HINT),
    (("random",), "global_rng", SEEDED_HINT),
    (("os", "urandom"), "global_rng", SEEDED_HINT),
    (("uuid", "uuid4"), "global_rng", SEEDED_HINT),
    (("secrets",), "global_rng", SEEDED_HINT),
    (("hash",), "unstable_hash", "use a stable hash (zlib.crc32) or explicit ids"),
]

FORBIDDEN_IMPORT_FROM = {"random", "secrets"}


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


def _iter_py_files(roots: Iterable[Path], *, exclude_dirs: list[Path]) -> list[Path]:
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        if root.is_file() and root.suffix.lower() == ".py":
            out.append(root)
            continue
        for p in root.rglob("*.py"):
            if any(_is_under(p, ex) for ex in exclude_dirs):
                continue
            out.append(p)
    return sorted(set(out))


def _attr_chain(node: ast.AST) -> list[str] | None:
    """
    For Attribute chains, return list like ["pygame", "time", "get_ticks"].
    For Names, return ["name"].
    """
    if isinstance(node, ast.Name):
        return [node.id]
    if isinstance(node, ast.Attribute):
        base = _attr_chain(node.value)
        if base is None:
            return None
        return [*base, node.attr]
    return None


def _display_path(file: Path) -> str:
    try:
        return str(file.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(file)


def _violation(kind: str, file: Path, node: ast.AST, detail: str) -> dict:
    return {
        "kind": kind,
        "file": _display_path(file),
        "line": int(getattr(node, "lineno", 0) or 0),
        "col": int(getattr(node, "col_offset", 0) or 0),
        "detail": detail,
    }


def _match_call(chain: list[str]) -> tuple[str, str] | None:
    for prefix, kind, hint in CALL_RULES:
        if prefix == ("hash",):
            if chain == ["hash"]:
                return kind, hint
        elif len(prefix) == 1:
            # Whole module: any random.x(...) / secrets.x(...)
            if len(chain) > 1 and chain[0] == prefix[0]:
                return kind, hint
        elif tuple(chain[: len(prefix)]) == prefix:
            return kind, hint
    return None


def scan_source(src: str, file_path: Path) -> list[dict]:
    try:
        tree = ast.parse(src, filename=str(file_path))
    except SyntaxError as e:
        return [
            {
                "kind": "parse_error",
                "file": _display_path(file_path),
                "line": int(getattr(e, "lineno", 0) or 0),
                "col": int(getattr(e, "offset", 0) or 0),
                "detail": f"SyntaxError: {e}",
            }
        ]

    findings: list[dict] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module in FORBIDDEN_IMPORT_FROM:
            findings.append(
                _violation("global_rng", file_path, node, f"from {node.module} import ...: {SEEDED_HINT}")
            )
            continue

        if not isinstance(node, ast.Call):
            continue
        chain = _attr_chain(node.func)
        if not chain:
            continue
        match = _match_call(chain)
        if match is not None:
            kind, hint = match
            findings.append(_violation(kind, file_path, node, f"{'.'.join(chain)}(): {hint}"))

    return findings


def scan_file(file_path: Path) -> list[dict]:
    try:
        src = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        src = file_path.read_text(encoding="utf-8", errors="replace")
    return scan_source(src, file_path)


def scan_paths(roots: Iterable[Path] | None = None, exclude_dirs: list[Path] | None = None) -> list[dict]:
    """Scan every .py file under `roots` (default: the simulation packages)."""
    roots = list(DEFAULT_SCAN_DIRS) if roots is None else list(roots)
    exclude_dirs = list(DEFAULT_EXCLUDE_DIRS) if exclude_dirs is None else exclude_dirs
    findings: list[dict] = []
    for f in _iter_py_files(roots, exclude_dirs=exclude_dirs):
        findings.extend(scan_file(f))
    return findings


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard (simulation code)")
    ap.add_argument(
        "--paths",
        nargs="*",
        default=[],
        help="Optional paths to scan (files or dirs). Default scans planar/ except planar/sim.",
    )
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    all_findings = scan_paths([Path(p) for p in ns.paths] if ns.paths else None)

    if ns.json:
        print(json.dumps({"findings": all_findings}, indent=2))
    else:
        if not all_findings:
            print("[determinism_guard] PASS: no violations found")
        else:
            print(f"[determinism_guard] FAIL: {len(all_findings)} violation(s)")
            for v in all_findings:
                print(f"- {v['file']}:{v['line']}:{v['col']} [{v['kind']}] {v['detail']}")

    return 0 if not all_findings else 1


if __name__ == "__main__":
    raise SystemExit(main())
