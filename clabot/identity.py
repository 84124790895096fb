"""Pick the email address a commit is judged by."""

from clabot.config import LitePRCommitter
from clabot.models import CommitRecord


def resolve_identity(
    commit: CommitRecord,
    check_by_committer: bool,
    lite_pr_rule: LitePRCommitter | None = None,
) -> str:
    """Return the author's email unless committer checking applies.

    Commits made by a lite-PR committer (merge bots, the web editor) are
    judged by their author even when ``check_by_committer`` is set.
    """
    if check_by_committer:
        is_lite = lite_pr_rule is not None and lite_pr_rule.is_lite_pr(
            commit.committer_email, commit.committer_name
        )
        if not is_lite:
            return commit.committer_email

    return commit.author_email
