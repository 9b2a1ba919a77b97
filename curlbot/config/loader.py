"""JSON configuration store for the curling bot.

Settings live in one JSON file (default: ./config.json, or the file named
by $CURLBOT_CONFIG_FILE) and are addressed with dot-separated keys such as
"bot.strategy.blank_lead". The file is read once, on first access, and
written back atomically in a background thread whenever a value is set.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CURLBOT_CONFIG_FILE"


class Config:
    """Process-wide configuration store.

    Example:
        config = Config()
        level = config.get("bot.difficulty", "medium")
        config.set("bot.difficulty", "hard")
    """

    _instance: Optional["Config"] = None
    _config_data: dict[str, Any] = {}
    _config_file: Optional[Path] = None
    _loaded: bool = False
    _save_lock = threading.Lock()

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def set_config_file(cls, config_path: str | Path) -> None:
        """Point the store at ``config_path`` and load it."""
        if cls._instance is None:
            cls._instance = cls()

        cls._config_file = Path(config_path).resolve()
        cls._instance._load_config()

    @property
    def config_file(self) -> Path:
        if self._config_file is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            path = Path(env_path) if env_path else Path(os.getcwd()) / "config.json"
            type(self)._config_file = path.resolve()
        return self._config_file

    def _load_config(self) -> None:
        """Read the config file; a missing or malformed file reads as empty."""
        path = self.config_file
        data: dict[str, Any] = {}
        try:
            if path.exists():
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
                logger.info(f"Loaded configuration from {path}")
            else:
                logger.warning(f"Config file not found: {path}, using empty config")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading config from {path}: {e}")

        type(self)._config_data = data if isinstance(data, dict) else {}
        type(self)._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self._load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Value at the dot-separated ``key``, or ``default`` if absent."""
        self._ensure_loaded()

        value = self._config_data
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> threading.Thread:
        """Store ``value`` at the dot-separated ``key`` and save in the background.

        The file is loaded first, so keys already on disk are kept.

        Returns:
            The thread performing the save
        """
        self._ensure_loaded()

        keys = key.split(".")
        data = self._config_data
        for k in keys[:-1]:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

        return self._save_config_async()

    def _save_config_async(self) -> threading.Thread:
        thread = threading.Thread(target=self._save_config, daemon=True)
        thread.start()
        return thread

    def _save_config(self) -> bool:
        """Atomically write the current config to disk.

        The JSON text is built before the file is touched, and written via a
        temporary file in the same directory, so a failed save leaves the
        previous file intact.

        Returns:
            True if the file was written
        """
        path = self.config_file
        with self._save_lock:
            try:
                text = json.dumps(self._config_data, indent=2, ensure_ascii=False)
            except (TypeError, ValueError) as e:
                logger.error(f"Config is not JSON serializable, not saving: {e}")
                return False

            tmp_name = None
            try:
                fd, tmp_name = tempfile.mkstemp(
                    dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp_name, path)
            except OSError as e:
                logger.error(f"Error saving config to {path}: {e}")
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                return False

        logger.debug(f"Saved configuration to {path}")
        return True

    def reload(self) -> None:
        """Re-read the config file, discarding unsaved changes."""
        self._load_config()


config = Config()
