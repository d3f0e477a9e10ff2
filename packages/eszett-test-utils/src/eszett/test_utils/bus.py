from contextlib import contextmanager
from typing import Any, Dict, List, Optional

# Import the actual singleton to patch it in-place
import eszett.common


class SpyRenderer:
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def render(self, message: str, level: str) -> None:
        pass

    def record(self, level: str, msg_id: str, params: Dict[str, Any]):
        self.messages.append({"level": level, "id": msg_id, "params": params})


class SpyBus:
    """
    Spies on the global eszett.common.bus singleton.

    Modules import the instance via 'from eszett.common import bus', so the
    instance methods are patched in place rather than the instance replaced.
    """

    def __init__(self):
        self._spy_renderer = SpyRenderer()

    @contextmanager
    def patch(self, monkeypatch: Any):
        real_bus = eszett.common.bus

        def intercept_render(level: str, msg_id: str, **kwargs: Any) -> None:
            self._spy_renderer.record(level, str(msg_id), kwargs)

        monkeypatch.setattr(real_bus, "_render", intercept_render)
        monkeypatch.setattr(real_bus, "_renderer", self._spy_renderer)

        yield self

    def get_messages(self) -> List[Dict[str, Any]]:
        return self._spy_renderer.messages

    def assert_id_called(self, msg_id: str, level: Optional[str] = None):
        captured = self.get_messages()
        for msg in captured:
            if msg["id"] == msg_id and (level is None or msg["level"] == level):
                return

        ids_seen = [m["id"] for m in captured]
        raise AssertionError(
            f"Message with ID '{msg_id}' was not sent.\nCaptured IDs: {ids_seen}"
        )
