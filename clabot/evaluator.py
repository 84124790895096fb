"""Find the commits of a pull request whose authors have not signed the CLA."""

import logging
import re
from collections.abc import Callable, Iterable

from clabot.config import BotConfig
from clabot.errors import EmptyCommitSetError, InvalidCommitIdentityError
from clabot.identity import resolve_identity
from clabot.models import CommitRecord, PRInfo

logger = logging.getLogger(__name__)

# Wider than the usual [a-zA-Z]{2,6} TLD rule, and "+" is allowed in the local
# part so GitHub noreply addresses are looked up instead of rejected.
EMAIL_RE = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$")

# Signature of SigningOracleClient.is_signed
SignedLookup = Callable[[str], bool]


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def evaluate(
    commits: Iterable[CommitRecord],
    cfg: BotConfig,
    is_signed: SignedLookup,
) -> dict[str, str]:
    """
    Compute the unsigned commits of a pull request.

    Each distinct email is looked up at most once per call; the memo is
    dropped when the call returns so registry updates are seen next time.

    Args:
        commits: Commits of the pull request, in listing order
        cfg: Repository configuration
        is_signed: Registry lookup, usually ``SigningOracleClient.is_signed``

    Returns:
        Mapping of commit SHA to commit message; empty if every author signed

    Raises:
        EmptyCommitSetError: If there are no commits
        InvalidCommitIdentityError: If a commit without SHA is unsigned
        OracleError: Propagated from the lookup; no partial result is returned
    """
    commits = list(commits)
    if not commits:
        raise EmptyCommitSetError()

    unsigned: dict[str, str] = {}
    verdicts: dict[str, bool] = {}

    for commit in commits:
        email = resolve_identity(commit, cfg.check_by_committer, cfg.lite_pr_committer).strip()

        if not is_valid_email(email):
            logger.debug(f"Commit {commit.sha} has invalid email {email!r}")
            unsigned[commit.sha] = commit.message
            continue

        if email not in verdicts:
            verdicts[email] = is_signed(email)

        if not verdicts[email]:
            unsigned[commit.sha] = commit.message

    if "" in unsigned:
        raise InvalidCommitIdentityError()

    logger.info(
        f"Checked {len(commits)} commit(s) from {len(verdicts)} author(s), "
        f"{len(unsigned)} unsigned"
    )
    return unsigned


def get_unsigned_commits(client, pr: PRInfo, cfg: BotConfig, is_signed: SignedLookup) -> dict[str, str]:
    """List the commits of ``pr`` through ``client`` and evaluate them."""
    return evaluate(client.list_commits(pr), cfg, is_signed)
