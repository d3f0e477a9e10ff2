__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .catalog import MessageCatalog
from .messaging.bus import MessageBus

# Global singleton instances
catalog = MessageCatalog()
bus = MessageBus(catalog)

__all__ = ["bus", "catalog", "MessageBus", "MessageCatalog"]
