import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib


@dataclass
class EszettConfig:
    module: str = "eszett"
    tag_export: str = "sz"
    scope_name_export: str = "scopeName"
    marker: str = "ß"
    class_attribute: str = "className"
    exempt_tags: List[str] = field(default_factory=lambda: ["style"])
    nested_scopes: bool = False
    hash_file_identity: bool = False
    relative_paths: bool = True
    # Directory holding the pyproject.toml the values came from.
    root: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root: Optional[Path] = None) -> "EszettConfig":
        known = {f.name for f in fields(cls)} - {"root"}
        values = {k.replace("-", "_"): v for k, v in data.items()}
        return cls(root=root, **{k: v for k, v in values.items() if k in known})


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def load_config_from_path(search_path: Path) -> EszettConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        return EszettConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    eszett_data: Dict[str, Any] = data.get("tool", {}).get("eszett", {})

    return EszettConfig.from_dict(eszett_data, root=config_path.parent)
