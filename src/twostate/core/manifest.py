import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "twostate.toml"
DECLARATION_SUFFIX = ".tsd"
OUTPUT_SUFFIX = "_twostate.py"


@dataclass
class GeneratorConfig:
    """Options that change what the emitter produces.

    Examples in twostate.toml:

        [generator]
        output_dir = "generated"
        synthesize_default_for_terse_form = true
        imports = ["import functools", "from myapp.settings import DEBUG"]
    """

    # Terse declarations (`enum Name;`) get a default() returning No
    synthesize_default_for_terse_form: bool = False
    output_dir: str = "generated"
    header: bool = True  # Leading "generated by" comment
    # Import lines written after `import enum`, for attributes and defaults
    imports: list[str] = field(default_factory=list)


@dataclass
class ProjectManifest:
    name: str
    project_root: Path = field(default_factory=Path.cwd)
    module_paths: list[str] = field(default_factory=lambda: ["."])
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @property
    def output_path(self) -> Path:
        return self.project_root / self.generator.output_dir


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e

    project = data.get("project", {})
    modules = data.get("modules", {})
    generator_data = data.get("generator", {})

    synthesize = generator_data.get("synthesize_default_for_terse_form", False)
    if not isinstance(synthesize, bool):
        raise ManifestError(
            f"{path}: generator.synthesize_default_for_terse_form must be true or false"
        )

    paths = modules.get("paths", ["."])
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        raise ManifestError(f"{path}: modules.paths must be a list of strings")

    imports = generator_data.get("imports", [])
    if not isinstance(imports, list) or not all(isinstance(i, str) for i in imports):
        raise ManifestError(f"{path}: generator.imports must be a list of strings")

    generator_config = GeneratorConfig(
        synthesize_default_for_terse_form=synthesize,
        output_dir=generator_data.get("output_dir", "generated"),
        header=generator_data.get("header", True),
        imports=imports,
    )

    manifest = ProjectManifest(
        name=project.get("name", path.parent.name),
        project_root=path.parent.resolve(),
        module_paths=paths,
        generator=generator_config,
    )
    logger.debug("Loaded manifest %s: %s", path, manifest)
    return manifest


def find_manifest(start: Path) -> Path | None:
    """Walk up from start looking for twostate.toml."""
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None
