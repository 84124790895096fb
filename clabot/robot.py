"""Event handling for the CLA robot."""

import logging
import re
from collections.abc import Callable

from clabot.config import BotConfig, Configuration
from clabot.errors import ConfigMissingError
from clabot.evaluator import get_unsigned_commits
from clabot.formatter import already_signed
from clabot.models import PRInfo, PullRequest
from clabot.oracle import SigningOracleClient
from clabot.reconciler import reconcile

logger = logging.getLogger(__name__)

CHECK_CLA_RE = re.compile(r"^/check-cla\s*$", re.IGNORECASE | re.MULTILINE)

# Actions that mean the PR was opened or its source branch changed
PR_ACTIONS = {"opened", "reopened", "synchronize"}


class CLARobot:
    """Checks CLA status of pull requests in response to GitHub events."""

    def __init__(
        self,
        client,
        config: Configuration,
        oracle_factory: Callable[[str], SigningOracleClient] = SigningOracleClient,
    ):
        """
        Args:
            client: PR capability implementation, usually ``GitHubClient``
            config: Robot configuration
            oracle_factory: Builds a registry client from a check URL
        """
        self.client = client
        self.config = config
        self.oracle_factory = oracle_factory

    def get_config(self, org: str, repo: str) -> BotConfig:
        cfg = self.config.config_for(org, repo)
        if cfg is None:
            raise ConfigMissingError(org, repo)
        return cfg

    def dispatch(self, event_name: str, payload: dict) -> bool | None:
        """Route a webhook payload by its GitHub event name."""
        if event_name == "pull_request":
            return self.handle_pull_request_event(payload)
        if event_name == "issue_comment":
            return self.handle_issue_comment_event(payload)

        logger.debug(f"Ignoring {event_name} event")
        return None

    def handle_pull_request_event(self, payload: dict) -> bool | None:
        """Check a pull request that was opened or pushed to.

        Returns:
            The verdict, or None if the event was ignored
        """
        action = payload.get("action", "")
        if payload["pull_request"].get("state") != "open" or action not in PR_ACTIONS:
            logger.debug(f"Ignoring pull_request event with action {action}")
            return None

        pr = _pull_request_from_payload(payload, payload["pull_request"])
        return self.handle(pr, self.get_config(pr.info.org, pr.info.repo))

    def handle_issue_comment_event(self, payload: dict) -> bool | None:
        """Re-check a pull request when someone comments ``/check-cla``."""
        issue = payload.get("issue") or {}
        if payload.get("action") != "created" or "pull_request" not in issue:
            logger.debug("Ignoring comment that is not a new pull request comment")
            return None

        comment = payload.get("comment") or {}
        if not CHECK_CLA_RE.search(comment.get("body") or ""):
            return None

        pr = _pull_request_from_payload(payload, issue)
        cfg = self.get_config(pr.info.org, pr.info.repo)

        requester = (comment.get("user") or {}).get("login") or pr.author
        return self.recheck(pr, cfg, requester)

    def recheck(self, pr: PullRequest, cfg: BotConfig, requester: str) -> bool:
        """Run a check and acknowledge ``requester`` if everything is signed."""
        signed = self.handle(pr, cfg)
        if signed:
            self.client.create_comment(pr.info, already_signed(requester))
        return signed

    def handle(self, pr: PullRequest, cfg: BotConfig) -> bool:
        """Evaluate the commits of ``pr`` and reconcile its labels and comments."""
        oracle = self.oracle_factory(cfg.check_url)
        unsigned = get_unsigned_commits(self.client, pr.info, cfg, oracle.is_signed)
        return reconcile(self.client, pr.info, unsigned, pr.labels, cfg)


def _pull_request_from_payload(payload: dict, data: dict) -> PullRequest:
    repository = payload["repository"]
    org = repository["owner"]["login"]
    repo = repository["name"]
    return PullRequest.from_api(org, repo, data)
