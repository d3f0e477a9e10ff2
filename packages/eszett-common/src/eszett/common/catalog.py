from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CATALOG = Path(__file__).parent / "assets" / "messages.yaml"


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in data.items():
        fqn = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, fqn))
        elif value is not None:
            flat[fqn] = str(value)
    return flat


class MessageCatalog:
    """
    Resolves dotted message ids ("transform.file.done") to format templates.

    Lookup falls back to the id itself, so a missing entry still renders
    something meaningful.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path or DEFAULT_CATALOG
        self._messages: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError:
            return {}
        if not isinstance(content, dict):
            return {}
        return _flatten(content)

    def get(self, msg_id: str) -> str:
        if self._messages is None:
            self._messages = self._load()
        return self._messages.get(msg_id, msg_id)

    def __contains__(self, msg_id: str) -> bool:
        if self._messages is None:
            self._messages = self._load()
        return msg_id in self._messages
