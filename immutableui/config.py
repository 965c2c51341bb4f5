# immutableui/config.py
from __future__ import annotations
import importlib
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "immutableui.yaml"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Config:
    """
    Singleton config loader that supports:
      - an embedded config module (default name: _embedded_config, attribute: CONFIG)
      - a fallback YAML file (immutableui.yaml)

    Usage:
        cfg = Config()  # prefers embedded if available, else loads immutableui.yaml
        trace = cfg.get_nested("reconciler.trace", False)
        raw = cfg.as_dict()
        cfg.reload()    # re-read embedded/file (useful in dev)

    Recognized keys:
      logging.level            - level name for the ``immutableui`` logger (default WARNING)
      logging.format           - log record format
      reconciler.trace         - debug-log every member write (default False)
      reconciler.check_types   - validate target types on apply (default True)

    Parameters:
      config_file: path to YAML config (relative or absolute). Attempts sensible fallbacks.
      prefer_embedded: when True (default) try embedded module first, otherwise check file first.
      embedded_module_name: module name to import when looking for embedded config (default: "_embedded_config")
    """

    _instance: Optional["Config"] = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(
        self,
        config_file: str = DEFAULT_CONFIG_FILE,
        prefer_embedded: bool = True,
        embedded_module_name: str = "_embedded_config",
    ):
        # initialize only once
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self.config_file_arg = config_file
        self.prefer_embedded = bool(prefer_embedded)
        self.embedded_module_name = embedded_module_name

        self._config: Dict[str, Any] = {}
        self._overrides: Dict[str, Any] = {}
        self._source: Optional[str] = None  # 'embedded' or 'file' or None

        self._resolved_config_path: Optional[Path] = self._resolve_config_path(config_file)

        self.reload()

    # ----- public API -----
    def reload(self, prefer_embedded: Optional[bool] = None) -> None:
        """
        Reload the configuration. If prefer_embedded is provided, it overrides the instance preference
        just for this reload. Runtime overrides set with :meth:`set` are kept.
        """
        if prefer_embedded is None:
            prefer = self.prefer_embedded
        else:
            prefer = bool(prefer_embedded)

        if prefer:
            loaded = self._try_load_embedded() or self._try_load_file()
        else:
            loaded = self._try_load_file() or self._try_load_embedded()

        if not loaded:
            self._source = None
            self._config = {}

    def as_dict(self) -> Dict[str, Any]:
        """Return the loaded configuration as a dict (may be empty)."""
        return dict(self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """Shallow lookup in the top-level config dict."""
        if key in self._overrides:
            return self._overrides[key]
        return self._config.get(key, default)

    def get_nested(self, path: str, default: Any = None, sep: str = ".") -> Any:
        """
        Lookup nested keys using dot-path (e.g. "reconciler.trace").
        Returns default if any step is missing.
        """
        if not path:
            return default
        if path in self._overrides:
            return self._overrides[path]
        cur = self._config
        for part in path.split(sep):
            if not isinstance(cur, dict):
                return default
            if part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    def set(self, path: str, value: Any) -> None:
        """Override a (dot-path) key at runtime without touching the loaded source."""
        self._overrides[path] = value

    def clear_overrides(self) -> None:
        self._overrides.clear()

    @property
    def is_embedded(self) -> bool:
        """True if the currently loaded config came from the embedded module."""
        return self._source == "embedded"

    @property
    def source(self) -> Optional[str]:
        """Return 'embedded'|'file'|None depending on where config came from."""
        return self._source

    @property
    def resolved_config_path(self) -> Optional[Path]:
        """If a filesystem config was resolved, return its Path, otherwise None."""
        return self._resolved_config_path

    # ----- internal helpers -----
    def _resolve_config_path(self, config_file: str) -> Optional[Path]:
        """
        Try to resolve the YAML config path using a few strategies:
          1. If config_file is absolute and exists -> return it
          2. If config_file relative to the package's parent (project root) exists -> return it
          3. If config_file relative to the package folder exists -> return it
          4. If config_file relative to cwd exists -> return it
          5. else return None
        """
        candidate = Path(config_file)
        if candidate.is_absolute():
            return candidate.resolve() if candidate.exists() else None

        here = Path(__file__).resolve().parent
        for base in (here.parent, here, Path.cwd()):
            p = (base / config_file).resolve()
            if p.exists():
                return p

        return None

    def _try_load_embedded(self) -> bool:
        """
        Try to import the embedded module and fetch CONFIG. Returns True on success.
        """
        try:
            module = importlib.import_module(self.embedded_module_name)
        except ModuleNotFoundError:
            return False
        logger.debug("Config: imported embedded module %s", module.__name__)
        cfg = getattr(module, "CONFIG", None) or getattr(module, "embedded_config", None)
        if isinstance(cfg, dict):
            self._config = dict(cfg)
            self._source = "embedded"
            return True
        if cfg is not None:
            logger.warning("Config: %s.CONFIG is a %s, expected a dict", module.__name__, type(cfg).__name__)
        return False

    def _try_load_file(self) -> bool:
        """
        Try to load YAML file from resolved path. Returns True on success.
        """
        if not self._resolved_config_path:
            return False
        try:
            with self._resolved_config_path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Config: could not read %s: %s", self._resolved_config_path, exc)
            return False
        if isinstance(data, dict):
            self._config = data
        elif data is None:
            self._config = {}
        else:
            # YAML parsed but not dict -> store raw under a key
            self._config = {"__root__": data}
        self._source = "file"
        logger.debug("Config: loaded %s", self._resolved_config_path)
        return True

    def describe(self) -> Dict[str, Any]:
        """Summary of where the configuration came from, for diagnostics."""
        return {
            "source": self._source,
            "embedded_module": self.embedded_module_name,
            "config_file_arg": self.config_file_arg,
            "resolved_config_path": str(self._resolved_config_path) if self._resolved_config_path else None,
            "keys": list(self._config.keys()),
        }


def get_config(*args, **kwargs) -> Config:
    """
    Convenience factory that returns the singleton Config instance.
    Arguments forwarded to Config() only on the first call.
    """
    return Config(*args, **kwargs)


def reset_config() -> None:
    """Drop the singleton so the next get_config() call loads afresh."""
    Config._instance = None


def configure_logging(config: Optional[Config] = None) -> None:
    """Apply ``logging.level`` and ``logging.format`` to the ``immutableui`` logger."""
    cfg = config or get_config()
    level_name = str(cfg.get_nested("logging.level", "WARNING")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    package_logger = logging.getLogger("immutableui")
    package_logger.setLevel(level)
    if not any(not isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(cfg.get_nested("logging.format", DEFAULT_LOG_FORMAT)))
        package_logger.addHandler(handler)
