# --- pdftext_lib/config.py ---
import configparser
import logging

from .models import ExtractionOptions

log = logging.getLogger("pdftext.config")


class ConfigService:
    """Manages reading from and writing to the pdftext.cfg file."""

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.defaults = {
            "Extraction": {
                "preserve_formatting": "true",
                "include_metadata": "true",
                "combine_text_items": "true",
            },
            "Source": {
                "password": "",
                "word_margin": "0.1",
            },
            "Logging": {
                "color_logs": "false",
                "debug_topics": "",
            },
        }

    def _load(self) -> configparser.ConfigParser:
        config = configparser.ConfigParser()
        # Apply defaults first
        for section, values in self.defaults.items():
            config[section] = values
        if not config.read(self.config_path):
            log.info("Config file not found at %s. Using defaults.", self.config_path)
        return config

    def get_settings(self) -> dict:
        """Reads settings from the config file, applying defaults if missing."""
        return self._config_to_dict(self._load())

    def save_settings(self, settings: dict):
        """Saves a dictionary of settings to the config file."""
        config = configparser.ConfigParser()
        for section, values in settings.items():
            config[section] = {k: str(v) for k, v in values.items()}

        try:
            with open(self.config_path, "w") as configfile:
                config.write(configfile)
            log.info("Settings successfully saved to %s", self.config_path)
        except IOError as e:
            log.error("Failed to write settings to %s: %s", self.config_path, e)

    def extraction_options(self) -> ExtractionOptions:
        """Builds ExtractionOptions from the [Extraction] section."""
        section = self._load()["Extraction"]
        return ExtractionOptions(
            preserve_formatting=section.getboolean("preserve_formatting"),
            include_metadata=section.getboolean("include_metadata"),
            combine_text_items=section.getboolean("combine_text_items"),
        )

    def source_kwargs(self) -> dict:
        """Keyword arguments for PdfFragmentSource from the [Source] section."""
        section = self._load()["Source"]
        return {
            "password": section.get("password", ""),
            "word_margin": section.getfloat("word_margin"),
        }

    def logging_settings(self) -> dict:
        section = self._load()["Logging"]
        return {
            "color_logs": section.getboolean("color_logs"),
            "debug_topics": section.get("debug_topics") or None,
        }

    def _config_to_dict(self, config: configparser.ConfigParser) -> dict:
        """Converts a ConfigParser object to a nested dictionary."""
        return {s: dict(config.items(s)) for s in config.sections()}
