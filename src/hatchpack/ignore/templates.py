"""Starter ignore files per runtime."""

from __future__ import annotations

from pathlib import Path

from hatchpack.constants import IGNORE_FILENAME
from hatchpack.schemas.enums import Runtime

_HEADER = f"# {IGNORE_FILENAME}: files to exclude from the deploy artifact\n"

TEMPLATES: dict[Runtime, str] = {
    Runtime.NODE: _HEADER
    + """node_modules/
src/
.next/
*.md
tests/
test/
__tests__/
*.test.js
*.test.ts
*.spec.js
*.spec.ts
tsconfig.json
""",
    Runtime.BUN: _HEADER
    + """node_modules/
src/
*.md
tests/
test/
__tests__/
*.test.ts
*.spec.ts
tsconfig.json
""",
    Runtime.PYTHON: _HEADER
    + """__pycache__/
*.pyc
.venv/
venv/
tests/
test/
*.md
setup.py
setup.cfg
pyproject.toml
""",
    Runtime.GO: _HEADER
    + """*.go
*_test.go
go.mod
go.sum
vendor/
*.md
Makefile
""",
    Runtime.RUST: _HEADER
    + """src/
target/
Cargo.toml
Cargo.lock
*.md
tests/
""",
    Runtime.STATIC: _HEADER
    + """node_modules/
src/
*.ts
*.tsx
*.jsx
*.md
tests/
test/
tsconfig.json
package.json
package-lock.json
""",
    Runtime.PHP: _HEADER
    + """node_modules/
vendor/
tests/
*.md
composer.lock
phpunit.xml
""",
}

# First hit wins; go and rust markers are checked before package.json.
RUNTIME_MARKERS: tuple[tuple[Runtime, tuple[str, ...]], ...] = (
    (Runtime.GO, ("go.mod",)),
    (Runtime.RUST, ("Cargo.toml",)),
    (Runtime.PYTHON, ("requirements.txt", "pyproject.toml", "Pipfile")),
    (Runtime.PHP, ("composer.json",)),
    (Runtime.BUN, ("bun.lockb", "bunfig.toml")),
    (Runtime.NODE, ("package.json",)),
    (Runtime.STATIC, ("index.html",)),
)


def detect_runtime(directory: Path) -> Runtime | None:
    """Guess the project runtime from marker files in ``directory``."""
    for runtime, markers in RUNTIME_MARKERS:
        if any((directory / marker).exists() for marker in markers):
            return runtime
    return None


def write_template(
    directory: Path,
    runtime: Runtime | None = None,
    *,
    filename: str = IGNORE_FILENAME,
) -> tuple[Path, Runtime]:
    """Write a starter ignore file; never overwrites an existing one."""
    selected = runtime or detect_runtime(directory)
    if selected is None:
        valid = ", ".join(r.value for r in TEMPLATES)
        raise ValueError(
            f"could not detect runtime. Use --runtime to specify one ({valid})"
        )
    target = directory / filename
    if target.exists():
        raise FileExistsError(
            f"{filename} already exists. Remove it first or edit it manually"
        )
    target.write_text(TEMPLATES[selected], encoding="utf-8")
    return target, selected
