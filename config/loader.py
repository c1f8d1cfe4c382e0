"""Environment configuration for the Xbox Live auth client

Values come from the process environment, then a .env file in the working
directory, then the defaults declared in settings.py.
"""

import logging
import os
from pathlib import Path
from typing import Any, List, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes')


class ConfigLoader:
    """Reads XBOX_AUTH_* values, typed after their default"""

    def __init__(self, env_path: Optional[str] = None):
        self.env_path = Path(env_path) if env_path else Path(".env")
        if self.env_path.exists():
            # never overrides variables already set in the environment
            load_dotenv(dotenv_path=self.env_path)
            logger.debug(f"Loaded {self.env_path}")

    def get(self, env_var: str, default: Any) -> Any:
        """Return env_var parsed as the type of default, or default when unset

        Lists are comma separated. A value that does not parse falls back to
        the default with a warning.
        """
        raw = os.getenv(env_var)
        if raw is None:
            if isinstance(default, str) and default.startswith("~/"):
                return str(Path(default).expanduser())
            return default

        # bool first, it is an int subclass
        if isinstance(default, bool):
            return raw.lower() in TRUE_VALUES
        if isinstance(default, (list, tuple)):
            return [item.strip() for item in raw.split(",") if item.strip()]
        if isinstance(default, (int, float)):
            try:
                return type(default)(raw)
            except ValueError:
                logger.warning(f"Ignoring {env_var}={raw!r}, expected {type(default).__name__}")
                return default
        return raw

    def get_list(self, env_var: str, default: List[str]) -> List[str]:
        return list(self.get(env_var, list(default)))


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
