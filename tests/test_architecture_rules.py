"""Architecture enforcement tests for layer boundaries.

Lightweight, repository-local invariants keeping the provider adapters
decoupled from the HTTP service layer. Static-file scans only, so there are
no import-time side effects, and failures list every offending file.

Rules validated here:
1) Adapter packages and ``base`` must not import ``gateway_providers.service``.
2) Adapter packages must not import each other, except Perplexity reusing the
   OpenAI dialect.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "gateway_providers"
ADAPTER_PACKAGES = ("openai", "anthropic", "gemini", "perplexity")


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory, skipping ``__pycache__``."""

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def test_inner_layers_do_not_import_service() -> None:
    """Ensure adapter and base modules do not import the service layer."""

    forbidden_snippets: List[str] = [
        "from gateway_providers.service",
        "import gateway_providers.service",
        "from ..service",
    ]
    offenders: List[str] = []
    for pkg in ("base", *ADAPTER_PACKAGES):
        for py in _iter_python_files(PACKAGE_ROOT / pkg):
            src = _read_text(py)
            offenders.extend(f"{py}: contains '{s}'" for s in forbidden_snippets if s in src)

    if offenders:
        pytest.fail("Inner layers must not import the service layer.\n" + "\n".join(offenders))


def test_adapters_do_not_import_each_other() -> None:
    allowed = {("perplexity", "openai")}
    offenders: List[str] = []
    for pkg in ADAPTER_PACKAGES:
        for py in _iter_python_files(PACKAGE_ROOT / pkg):
            src = _read_text(py)
            for other in ADAPTER_PACKAGES:
                if other == pkg or (pkg, other) in allowed:
                    continue
                if f"from ..{other}" in src or f"gateway_providers.{other}" in src:
                    offenders.append(f"{py}: imports '{other}'")

    if offenders:
        pytest.fail("Adapters must stay independent.\n" + "\n".join(offenders))
