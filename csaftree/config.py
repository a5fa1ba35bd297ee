"""
Session configuration.

Settings can be given directly, loaded from a YAML file, or read from
``CSAFTREE_*`` environment variables (a ``.env`` file is honoured).
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

ENV_PREFIX = "CSAFTREE_"


@dataclass
class SessionConfig:
    """Configuration for a document session.

    Example:
        config = SessionConfig(
            family_chain_separator=" > ",
            relationship_id_prefix="CSAFRID"
        )
    """

    # Naming
    full_name_separator: str = " "
    family_chain_separator: str = " / "
    untitled_version_name: str = "Untitled product version"

    # Wire ids for relationship edges
    relationship_id_prefix: str = "CSAFRID"
    wire_id_padding: int = 4

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Create from a dictionary.

        Raises:
            ValueError: If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown session config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> "SessionConfig":
        """Load configuration from a YAML file.

        The settings may sit under a top-level ``session`` key or at the top
        level of the file.

        Example YAML:
            session:
              family_chain_separator: " > "
              relationship_id_prefix: CSAFRID
              log_level: DEBUG
        """
        with open(path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Expected a mapping in {path}")

        return cls.from_dict(config.get('session', config))

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "SessionConfig":
        """Read ``CSAFTREE_<FIELD>`` environment variables.

        Args:
            dotenv_path: Optional .env file; by default the nearest .env is used
        """
        load_dotenv(dotenv_path)

        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            values[f.name] = int(raw) if f.type in (int, "int") else raw
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def configure_logging(config: Optional[SessionConfig] = None) -> None:
    """Attach a stream handler to the ``csaftree`` logger.

    Library code only creates loggers; applications call this once.
    """
    config = config or SessionConfig()
    logger = logging.getLogger("csaftree")
    logger.setLevel(config.log_level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        logger.addHandler(handler)
