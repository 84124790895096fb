"""Shared fakes for robot tests."""

from clabot.config import BotConfig, LitePRCommitter
from clabot.models import Comment, CommitRecord


def make_config(**overrides) -> BotConfig:
    values = {
        "repos": ["org"],
        "cla_label_yes": "cla/yes",
        "cla_label_no": "cla/no",
        "sign_url": "https://cla.example.com/sign",
        "faq_url": "https://cla.example.com/faq",
        "check_url": "https://cla.example.com/check",
        "check_by_committer": False,
        "lite_pr_committer": LitePRCommitter(email="noreply@github.com", name="GitHub"),
    }
    values.update(overrides)
    return BotConfig(**values)


def make_commit(sha: str, email: str, message: str = "", **kwargs) -> CommitRecord:
    return CommitRecord(sha=sha, message=message or f"commit {sha}", author_email=email, **kwargs)


class FakeOracle:
    """Registry lookup answering from a dict and counting calls."""

    def __init__(self, answers: dict[str, bool] | None = None, error: Exception | None = None):
        self.answers = answers or {}
        self.error = error
        self.calls: list[str] = []

    def is_signed(self, email: str) -> bool:
        self.calls.append(email)
        if self.error is not None:
            raise self.error
        return self.answers.get(email, False)


class FakePRClient:
    """In-memory pull request with the capability interface of GitHubClient."""

    def __init__(self, commits=None, labels=None, comments=None):
        self.commits = list(commits or [])
        self.labels = set(labels or [])
        self.comments = {c.id: c for c in comments or []}
        self.next_comment_id = max(self.comments, default=0) + 1
        self.calls: list[tuple] = []
        # Exceptions to raise, keyed by method name
        self.failures: dict[str, Exception] = {}

    def _maybe_fail(self, name: str) -> None:
        if name in self.failures:
            raise self.failures[name]

    def add_label(self, pr, label):
        self.calls.append(("add_label", label))
        self._maybe_fail("add_label")
        self.labels.add(label)

    def remove_label(self, pr, label):
        self.calls.append(("remove_label", label))
        self._maybe_fail("remove_label")
        self.labels.discard(label)

    def create_comment(self, pr, comment):
        self.calls.append(("create_comment", comment))
        self._maybe_fail("create_comment")
        self.comments[self.next_comment_id] = Comment(id=self.next_comment_id, body=comment)
        self.next_comment_id += 1

    def delete_comment(self, org, repo, comment_id):
        self.calls.append(("delete_comment", comment_id))
        self._maybe_fail("delete_comment")
        del self.comments[comment_id]

    def list_commits(self, pr):
        self.calls.append(("list_commits",))
        self._maybe_fail("list_commits")
        return list(self.commits)

    def list_comments(self, pr):
        self.calls.append(("list_comments",))
        self._maybe_fail("list_comments")
        return list(self.comments.values())

    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("add_label", "remove_label", "create_comment")]

    def comment_bodies(self) -> list[str]:
        return [c.body for c in self.comments.values()]
