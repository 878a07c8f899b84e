"""JSON serialization helpers for launch parameters and run artifacts."""

import json
import logging
from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum


class JSONHandler:
    """Handler for JSON text conversion."""

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent
        self.logger = logging.getLogger(__name__)

    def serialize(self, data: Any, sort_keys: bool = False) -> str:
        """Serialize data to a JSON string."""
        return json.dumps(
            data,
            indent=self.indent,
            ensure_ascii=False,
            sort_keys=sort_keys,
            default=self._json_serializer
        )

    def parse_map(self, content: Optional[str]) -> Dict[str, Any]:
        """Parse a JSON object string into a dictionary.

        Blank input yields an empty dictionary.

        Raises:
            ValueError: If content is not valid JSON or not a JSON object
        """
        if content is None or not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON: {str(e)}")
            raise ValueError(f"Invalid JSON: {str(e)}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        return data

    def _json_serializer(self, obj: Any) -> Any:
        """Custom JSON serializer for non-serializable objects."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.name
        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()
        elif hasattr(obj, '__dict__'):
            return obj.__dict__
        else:
            return str(obj)
