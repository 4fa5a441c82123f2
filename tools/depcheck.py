from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

FRAMEWORK_MODULES = {
    "fastapi",
    "starlette",
    "pydantic",
    "uvicorn",
    "httpx",
    "requests",
    "opentelemetry",
    "prometheus_client",
}

# Each layer may only import the layers listed below it.
LAYER_RULES: dict[str, set[str]] = {
    "domain": FRAMEWORK_MODULES | {"rpos.application", "rpos.infrastructure", "rpos.api"},
    "application": {"fastapi", "starlette", "httpx", "rpos.infrastructure", "rpos.api"},
}

SRC_ROOT = Path(__file__).resolve().parents[1] / "src" / "rpos"
DEFAULT_LAYER_PATHS = {layer: SRC_ROOT / layer for layer in LAYER_RULES}


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    layer: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden_modules: set[str]) -> bool:
    return any(
        module == forbidden or module.startswith(f"{forbidden}.")
        for forbidden in forbidden_modules
    )


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def _scan_file(file_path: Path, layer: str) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    forbidden_modules = LAYER_RULES[layer]
    return [
        Violation(file_path=file_path, line=line, module=module, layer=layer)
        for line, module in _imported_modules(tree)
        if _matches_forbidden(module, forbidden_modules)
    ]


def find_violations(paths: Sequence[Path], layer: str = "domain") -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path, layer))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Layering check for src/rpos: the domain stays framework-free and "
        "the application layer never reaches into infrastructure or the web API."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to every layer under src/rpos.",
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        default="domain",
        help="Rule set applied to --path arguments (default: domain).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.path:
        violations = find_violations([Path(item) for item in args.path], layer=args.layer)
    else:
        violations = []
        for layer, path in DEFAULT_LAYER_PATHS.items():
            violations.extend(find_violations([path], layer=layer))

    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module} ({violation.layer})")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
