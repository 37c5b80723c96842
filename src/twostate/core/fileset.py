from pathlib import Path

from .manifest import DECLARATION_SUFFIX, ProjectManifest


def discover_declaration_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.module_paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            files.append(base)
            continue
        for p in base.rglob(f"*{DECLARATION_SUFFIX}"):
            files.append(p)
    return sorted(set(files))
