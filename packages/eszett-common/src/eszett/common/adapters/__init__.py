from .json_adapter import JsonAdapter

__all__ = ["JsonAdapter"]
