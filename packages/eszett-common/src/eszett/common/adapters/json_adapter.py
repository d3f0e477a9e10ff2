import json
from pathlib import Path
from typing import Any, Dict


class JsonAdapter:
    """Reads and writes ESTree documents as UTF-8 JSON."""

    indent = 2

    def load(self, path: Path) -> Dict[str, Any]:
        return json.loads(path.read_text(encoding="utf-8"))

    def dump(self, data: Dict[str, Any]) -> str:
        return json.dumps(data, ensure_ascii=False, indent=self.indent) + "\n"

    def save(self, path: Path, data: Dict[str, Any]) -> bool:
        """Writes `data` unless the file already holds the same text.

        Returns whether the file was touched.
        """
        text = self.dump(data)
        try:
            unchanged = path.read_text(encoding="utf-8") == text
        except (FileNotFoundError, UnicodeDecodeError):
            unchanged = False
        if unchanged:
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return True
