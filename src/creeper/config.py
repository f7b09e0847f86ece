# src/creeper/config.py
import json
import logging
from pathlib import Path
from typing import Dict, Any

logger = logging.getLogger(__name__)

# Config paths
CONFIG_DIR = Path.home() / ".creeper"
CONFIG_FILE = CONFIG_DIR / "settings.json"

CONFIG_DIR.mkdir(exist_ok=True)

DEFAULT_CONFIG = {
    "input_dir": "",
    "output_dir": "",
    "project_name": "creeper_report",
    "include_no_gps": False,
    "max_workers": None,
}

PROCESSING_KEYS = ("include_no_gps", "max_workers")


class ConfigManager:
    @staticmethod
    def load_config() -> Dict[str, Any]:
        """Loads settings from the JSON file, falling back to the defaults."""
        if not CONFIG_FILE.exists():
            return DEFAULT_CONFIG.copy()

        try:
            with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)
                # Merge with defaults to handle new keys
                config = DEFAULT_CONFIG.copy()
                config.update(data)
                return config
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load settings: {e}")
            return DEFAULT_CONFIG.copy()

    @staticmethod
    def save_config(input_dir: str = "", output_dir: str = "", project_name: str = "", **kwargs) -> None:
        """Saves the paths (and any extra settings) to the JSON file."""
        current = ConfigManager.load_config()

        if input_dir:
            current["input_dir"] = str(input_dir)
        if output_dir:
            current["output_dir"] = str(output_dir)
        if project_name:
            current["project_name"] = str(project_name)

        current.update(kwargs)
        ConfigManager._write(current)

    @staticmethod
    def update_settings(settings: Dict[str, Any]) -> None:
        """Update only processing settings (not paths)."""
        current = ConfigManager.load_config()
        for key in PROCESSING_KEYS:
            if key in settings:
                current[key] = settings[key]
        ConfigManager._write(current)

    @staticmethod
    def _write(config: Dict[str, Any]) -> None:
        try:
            with open(CONFIG_FILE, "w", encoding="utf-8") as f:
                json.dump(config, f, indent=4)
        except OSError as e:
            logger.warning(f"Error saving settings: {e}")
