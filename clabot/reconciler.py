"""
Label and comment reconciliation.

Brings the labels and guidance comment of a pull request in line with the
set of unsigned commits. All state is re-read from the pull request on every
call, so handling the same event twice converges to the same result.
"""

import logging
from collections.abc import Mapping

from clabot.config import BotConfig
from clabot.errors import LabelMutationError
from clabot.formatter import is_sign_guide, sign_guide
from clabot.models import PRInfo

logger = logging.getLogger(__name__)


def purge_sign_guides(client, pr: PRInfo) -> int:
    """Delete every guidance comment on ``pr``. Failures are ignored.

    Returns:
        Number of comments deleted
    """
    try:
        comments = client.list_comments(pr)
    except Exception as e:
        logger.debug(f"Could not list comments of {pr}: {e}")
        return 0

    deleted = 0
    for comment in comments:
        if not is_sign_guide(comment.body):
            continue
        try:
            client.delete_comment(pr.org, pr.repo, comment.id)
            deleted += 1
        except Exception as e:
            logger.debug(f"Could not delete comment {comment.id} of {pr}: {e}")

    return deleted


def reconcile(
    client,
    pr: PRInfo,
    unsigned: Mapping[str, str],
    labels: set[str],
    cfg: BotConfig,
) -> bool:
    """
    Apply the label and comment transitions for ``unsigned``.

    Args:
        client: Implementation of the PR capability interface
        pr: Pull request to update
        unsigned: Unsigned commits (SHA to message)
        labels: Labels currently on the pull request
        cfg: Repository configuration

    Returns:
        True if every commit is signed

    Raises:
        LabelMutationError: If a label could not be removed, or the pass
            label could not be added (``fully_signed`` is then True)
    """
    has_yes = cfg.cla_label_yes in labels
    has_no = cfg.cla_label_no in labels

    purge_sign_guides(client, pr)

    if not unsigned:
        if has_no:
            _remove_label(client, pr, cfg.cla_label_no)

        if not has_yes:
            try:
                client.add_label(pr, cfg.cla_label_yes)
            except Exception as e:
                raise LabelMutationError(cfg.cla_label_yes, "add", e, fully_signed=True) from e
            logger.info(f"Added {cfg.cla_label_yes} to {pr}")

        return True

    if has_yes:
        _remove_label(client, pr, cfg.cla_label_yes)

    if not has_no:
        try:
            client.add_label(pr, cfg.cla_label_no)
            logger.info(f"Added {cfg.cla_label_no} to {pr}")
        except Exception as e:
            logger.warning(f"Could not add {cfg.cla_label_no} label to {pr}: {e}")

    client.create_comment(pr, sign_guide(cfg.sign_url, unsigned, cfg.faq_url))
    logger.info(f"Posted sign guide for {len(unsigned)} unsigned commit(s) on {pr}")
    return False


def _remove_label(client, pr: PRInfo, label: str) -> None:
    try:
        client.remove_label(pr, label)
    except Exception as e:
        raise LabelMutationError(label, "remove", e) from e
    logger.info(f"Removed {label} from {pr}")
