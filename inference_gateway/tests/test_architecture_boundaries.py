"""Architecture boundary guardrails for the inner ``base`` layer.

``inference_gateway/base`` holds transport-agnostic building blocks and must
not depend on the outer layers (``gateway``, ``config``). The check is
AST-based so string mentions in docstrings do not count.
"""

from __future__ import annotations

import ast
from pathlib import Path

PKG_ROOT = Path(__file__).resolve().parents[1]
BASE_DIR = PKG_ROOT / "base"
OUTER_LAYERS = ("gateway", "config")


def _iter_py_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*.py") if "__pycache__" not in p.parts)


def _outer_imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    hits: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom):
            module = node.module or ""
            parts = module.split(".")
            absolute = module.startswith("inference_gateway.") and len(parts) > 1 and parts[1] in OUTER_LAYERS
            # from ..gateway / ...config inside base/ climbs out of the layer
            relative = node.level >= 2 and parts[0] in OUTER_LAYERS
            if absolute or relative:
                hits.append(f"{path.relative_to(PKG_ROOT)}:{node.lineno} -> {module}")
        elif isinstance(node, ast.Import):
            for alias in node.names:
                parts = alias.name.split(".")
                if parts[0] == "inference_gateway" and len(parts) > 1 and parts[1] in OUTER_LAYERS:
                    hits.append(f"{path.relative_to(PKG_ROOT)}:{node.lineno} -> {alias.name}")
    return hits


def test_base_layer_does_not_import_outer_layers() -> None:
    offenders = [hit for path in _iter_py_files(BASE_DIR) for hit in _outer_imports(path)]
    assert not offenders, "base layer imports outer layers:\n" + "\n".join(offenders)  # nosec B101
