import json
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Tuple

import tomli_w


class WorkspaceFactory:
    """
    Builds a throwaway project: a `pyproject.toml` carrying `[tool.eszett]`
    plus ESTree JSON inputs, as a front end would have emitted them.
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._pyproject: Dict[str, Any] = {}
        self._files: List[Tuple[str, str]] = []

    def with_config(self, eszett_config: Dict[str, Any]) -> "WorkspaceFactory":
        self._pyproject.setdefault("tool", {})["eszett"] = eszett_config
        return self

    def with_project_name(self, name: str) -> "WorkspaceFactory":
        self._pyproject.setdefault("project", {})["name"] = name
        return self

    def with_tree(self, path: str, program: Dict[str, Any]) -> "WorkspaceFactory":
        self._files.append((path, json.dumps(program, ensure_ascii=False, indent=2)))
        return self

    def with_raw_file(self, path: str, content: str) -> "WorkspaceFactory":
        self._files.append((path, dedent(content)))
        return self

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        if self._pyproject:
            (self.root_path / "pyproject.toml").write_text(
                tomli_w.dumps(self._pyproject), encoding="utf-8"
            )

        for relative_path, content in self._files:
            output_path = self.root_path / relative_path
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")

        return self.root_path
