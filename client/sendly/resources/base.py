from typing import Any, Dict


class Resource:
    """Base class for resource facades. Holds the owning client."""

    def __init__(self, client):
        self._client = client

    @staticmethod
    def _unwrap(response: Any, *keys: str) -> Any:
        """Return the first envelope key present in the response, or the response itself"""
        if isinstance(response, dict):
            for key in keys:
                if response.get(key) is not None:
                    return response[key]
        return response

    @staticmethod
    def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in values.items() if v is not None}
