"""
Per-repository configuration for the CLA robot.

The configuration is a JSON document holding a list of items; each item
applies to a set of organizations and/or ``org/repo`` pairs.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from clabot.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CLABOT_CONFIG"
DEFAULT_CONFIG_FILE = "clabot.json"


@dataclass
class LitePRCommitter:
    """Recognizes automated or merge committers that should be judged by author."""

    email: str = ""
    name: str = ""

    def is_lite_pr(self, email: str, name: str) -> bool:
        return bool((self.email and email == self.email) or (self.name and name == self.name))


@dataclass
class BotConfig:
    repos: list[str]
    cla_label_yes: str
    cla_label_no: str
    sign_url: str
    faq_url: str
    check_url: str
    excluded_repos: list[str] = field(default_factory=list)
    check_by_committer: bool = False
    lite_pr_committer: LitePRCommitter = field(default_factory=LitePRCommitter)

    REQUIRED_FIELDS = ("cla_label_yes", "cla_label_no", "sign_url", "faq_url", "check_url")

    @classmethod
    def from_dict(cls, data: dict) -> "BotConfig":
        lite = data.get("lite_pr_committer") or {}
        return cls(
            repos=list(data.get("repos") or []),
            excluded_repos=list(data.get("excluded_repos") or []),
            cla_label_yes=data.get("cla_label_yes", ""),
            cla_label_no=data.get("cla_label_no", ""),
            sign_url=data.get("sign_url", ""),
            faq_url=data.get("faq_url", ""),
            check_url=data.get("check_url", ""),
            check_by_committer=data.get("check_by_committer", False),
            lite_pr_committer=LitePRCommitter(
                email=lite.get("email", ""),
                name=lite.get("name", ""),
            ),
        )

    def validate(self) -> None:
        if not self.repos:
            raise ConfigError("missing repos")

        for name in self.REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ConfigError(f"missing {name}")

        if not isinstance(self.check_by_committer, bool):
            raise ConfigError(
                f"check_by_committer must be true or false, got {self.check_by_committer!r}"
            )

    def covers(self, org: str, repo: str) -> bool:
        """True if this item applies to ``org/repo`` through an org-wide entry."""
        full_name = f"{org}/{repo}"
        return org in self.repos and full_name not in self.excluded_repos


class Configuration:
    """All configuration items of the robot."""

    def __init__(self, items: list[BotConfig] | None = None):
        self.items = items or []

    @classmethod
    def from_dict(cls, data: dict) -> "Configuration":
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a JSON object")

        items = data.get("config_items") or []
        if not isinstance(items, list):
            raise ConfigError("config_items must be a list")

        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ConfigError(f"config_items[{index}] must be a JSON object")

        return cls([BotConfig.from_dict(item) for item in items])

    @classmethod
    def load(cls, path: str | Path | None = None) -> "Configuration":
        """Load and validate a configuration file.

        Args:
            path: File to read. Falls back to ``$CLABOT_CONFIG`` and then to
                ``clabot.json`` in the working directory.

        Raises:
            ConfigError: If the file is missing, unparsable or invalid.
        """
        config_path = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigError(f"config file not found: {config_path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"error parsing {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"could not read {config_path}: {e}") from e

        config = cls.from_dict(data)
        config.validate()
        logger.debug(f"Loaded {len(config.items)} config item(s) from {config_path}")
        return config

    def validate(self) -> None:
        for index, item in enumerate(self.items):
            try:
                item.validate()
            except ConfigError as e:
                raise ConfigError(f"config_items[{index}]: {e}") from e

    def config_for(self, org: str, repo: str) -> BotConfig | None:
        """Find the item for ``org/repo``; an exact repo entry beats an org entry."""
        full_name = f"{org}/{repo}"
        for item in self.items:
            if full_name in item.repos:
                return item

        for item in self.items:
            if item.covers(org, repo):
                return item

        return None
