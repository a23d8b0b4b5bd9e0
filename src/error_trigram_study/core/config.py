"""
Purpose: Load environment and JSON configuration for a study run.
Constraints: Pure config I/O only; no network side effects.
"""

# Imports
import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from error_trigram_study.core.config_models import (
    AnalysisSettings,
    DEFAULT_TERMINATORS,
    SearchSettings,
)

logger = logging.getLogger(__name__)

# env var -> (section, field)
_ENV_OVERRIDES = {
    "SE_SITE": ("search", "site"),
    "SE_TAGGED": ("search", "tagged"),
    "SE_BODY_FILTER": ("search", "body_filter"),
    "SE_PAGESIZE": ("search", "pagesize"),
    "SE_NUM_PAGES": ("search", "num_pages"),
    "SE_SORT": ("search", "sort"),
    "SE_API_KEY": ("search", "api_key"),
    "SE_TIMEOUT": ("search", "timeout"),
    "MOCK_MODE": ("search", "mock_mode"),
    "TOP_K": ("analysis", "top_k"),
    "SAMPLE_SIZE": ("analysis", "sample_size"),
    "UNESCAPE_HTML": ("analysis", "unescape_html"),
}


def _default_config_dir() -> Path:
    override = os.getenv("CONFIG_DIR", "").strip()
    return Path(override) if override else Path.cwd() / "config"


# Public API
class ConfigManager:
    """Search and analysis settings merged from defaults, JSON files and the environment"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else _default_config_dir()
        self.search_settings: Dict[str, Any] = SearchSettings().model_dump()
        self.analysis_settings: Dict[str, Any] = AnalysisSettings().model_dump()
        self.loaded_env_file: Optional[Path] = None

    def load_all(self):
        """Load all configurations"""
        self.load_env()
        self.load_settings()
        self.load_terminators()
        return self

    def load_env(self):
        """Load the first env file found; values already in os.environ win"""
        env_files = [
            self.config_dir / "credentials.env",
            Path.cwd() / ".env",
            Path.home() / ".error_trigrams.env",
        ]
        for env_file in env_files:
            if env_file.exists():
                load_dotenv(env_file)
                self.loaded_env_file = env_file
                logger.info("Loaded environment from: %s", env_file)
                break
        else:
            logger.debug("No .env file found")
        return self

    def load_settings(self):
        """Merge settings.json sections and environment overrides into typed settings"""
        raw = self.load_json("settings.json", default={}) or {}
        if not isinstance(raw, dict):
            logger.warning("Invalid format in settings.json, using defaults")
            raw = {}
        sections = {
            "search": dict(raw.get("search") or {}),
            "analysis": dict(raw.get("analysis") or {}),
        }
        for env_var, (section, field) in _ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value is not None and value != "":
                sections[section][field] = value

        try:
            self.search_settings = SearchSettings(**sections["search"]).model_dump()
        except ValidationError as exc:
            logger.warning("Invalid search settings, using defaults: %s", exc)
            self.search_settings = SearchSettings().model_dump()
        try:
            self.analysis_settings = AnalysisSettings(**sections["analysis"]).model_dump()
        except ValidationError as exc:
            logger.warning("Invalid analysis settings, using defaults: %s", exc)
            self.analysis_settings = AnalysisSettings().model_dump()
        return self

    def load_terminators(self) -> List[str]:
        """terminators.json, when present, replaces the terminator list from settings"""
        if not (self.config_dir / "terminators.json").exists():
            return self.analysis_settings["terminators"]
        terminators = self._load_json_list("terminators.json", self.analysis_settings["terminators"])
        try:
            validated = AnalysisSettings(**{**self.analysis_settings, "terminators": terminators})
        except ValidationError as exc:
            logger.warning("Invalid terminators.json, using defaults: %s", exc)
            validated = AnalysisSettings(**{**self.analysis_settings, "terminators": DEFAULT_TERMINATORS})
        self.analysis_settings = validated.model_dump()
        return self.analysis_settings["terminators"]

    def _load_json_list(self, filename: str, default: List[str]) -> List[str]:
        """Helper to load JSON list files"""
        data = self.load_json(filename, default=None)
        if data is None:
            return default
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            logger.warning("Invalid format in %s, using defaults", filename)
            return default
        return data

    def load_json(self, path: str, default: Any = None) -> Any:
        """Load JSON from a path relative to the config dir; missing or empty files give default"""
        path_obj = Path(path)
        if not path_obj.is_absolute():
            path_obj = self.config_dir / path_obj
        if not path_obj.exists():
            return default

        try:
            content = path_obj.read_text(encoding="utf-8").strip()
        except OSError as exc:
            logger.warning("Error reading %s: %s", path_obj, exc)
            return default
        if not content:
            return default
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            logger.warning("Error reading %s: %s. Using defaults.", path_obj, exc)
            return default

    @property
    def search(self) -> SearchSettings:
        return SearchSettings(**self.search_settings)

    @property
    def analysis(self) -> AnalysisSettings:
        return AnalysisSettings(**self.analysis_settings)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value; dotted keys address a section ("search.tagged")"""
        if "." in key:
            section, _, field = key.partition(".")
            settings = {"search": self.search_settings, "analysis": self.analysis_settings}.get(section)
            if settings is not None:
                return settings.get(field, default)
            return default
        if key in self.search_settings:
            return self.search_settings[key]
        return self.analysis_settings.get(key, default)

    def print_summary(self):
        """Print configuration summary"""
        print("\n" + "="*50)
        print("Configuration Summary")
        print("="*50)
        print(f"Config dir: {self.config_dir}")
        print(f"Env file: {self.loaded_env_file or '(none)'}")

        print("\nSearch:")
        for key, value in self.search_settings.items():
            if key == "api_key":
                value = ("***" + value[-3:] if len(value) > 3 else "***") if value else "(empty)"
            print(f"  {key}: {value}")

        print("\nAnalysis:")
        for key, value in self.analysis_settings.items():
            if key == "terminators":
                value = ", ".join(repr(t) for t in value)
            print(f"  {key}: {value}")
        print("="*50 + "\n")
