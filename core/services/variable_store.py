"""Run-scoped variable store shared between orchestration steps."""

import re
from typing import Dict, Mapping, Optional

from core.utils.logger import get_run_logger

INSTANCE_ID_KEY = "instance-id"

_PLACEHOLDER = re.compile(r"\$(\{[A-Za-z0-9_.]+\}|[A-Za-z0-9_]+)")


class VariableStore:
    """Key/value store for passing values between ordered steps of one run.

    Writes to an existing key overwrite it; last writer wins.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._variables: Dict[str, str] = dict(initial or {})
        self.logger = get_run_logger(__name__)

    def get_variable(self, key: str) -> Optional[str]:
        return self._variables.get(key)

    def read_variable(self, key: str) -> Optional[str]:
        """Get a variable, logging when a value was expected but is absent."""
        value = self._variables.get(key)
        if value is None:
            self.logger.warning(f"Expected a value for key: {key}, no entry found")
        return value

    def set_variable(self, key: str, value: str) -> None:
        self.logger.info(f"Saving build variable {key}")

        if key in self._variables:
            self.logger.info(f"Replacing current value: {value}")

        self._variables[key] = value

    def resolve_placeholders(
        self, source: Optional[str], environ: Optional[Mapping[str, str]] = None
    ) -> Optional[str]:
        """Expand $NAME and ${NAME} using stored variables, then ``environ``.

        Placeholders with no matching value are left as they are.
        """
        if source is None or not source.strip():
            return source

        environ = environ or {}

        def replace(match):
            name = match.group(1).strip("{}")
            if name in self._variables:
                return self._variables[name]
            if name in environ:
                return environ[name]
            return match.group(0)

        return _PLACEHOLDER.sub(replace, source)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._variables)
