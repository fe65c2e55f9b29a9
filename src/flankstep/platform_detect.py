"""
Platform detection from a flank YAML configuration.
"""

import yaml

from flankstep.constants import PLATFORM_ANDROID, PLATFORM_IOS
from flankstep.exceptions import ConfigFileError


def detect_platform(config_yml_path: str) -> str:
    """
    Return "android" if the config has a ``gcloud.app`` value, otherwise "ios".

    Raises:
        ConfigFileError: The file cannot be read, is not valid YAML, or its
            document or ``gcloud`` section is not a mapping.
    """
    try:
        with open(config_yml_path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(
            "Failed to read flank config", path=config_yml_path, details=str(e)
        ) from e
    except yaml.YAMLError as e:
        raise ConfigFileError(
            "Failed to parse flank config", path=config_yml_path, details=str(e)
        ) from e

    if document is None:
        return PLATFORM_IOS
    if not isinstance(document, dict):
        raise ConfigFileError(
            "Flank config must be a mapping", path=config_yml_path
        )

    gcloud = document.get("gcloud") or {}
    if not isinstance(gcloud, dict):
        raise ConfigFileError(
            "The gcloud section of the flank config must be a mapping",
            path=config_yml_path,
        )

    app = gcloud.get("app")
    if app is not None and str(app):
        return PLATFORM_ANDROID
    return PLATFORM_IOS
