"""Data types shared across the robot."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommitRecord:
    """A single commit of a pull request, as listed by GitHub."""

    sha: str
    message: str
    author_email: str = ""
    committer_email: str = ""
    committer_name: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "CommitRecord":
        """Build a record from an entry of ``GET /pulls/{n}/commits``."""
        commit = data.get("commit") or {}
        author = commit.get("author") or {}
        committer = commit.get("committer") or {}
        return cls(
            sha=data.get("sha") or "",
            message=commit.get("message") or "",
            author_email=author.get("email") or "",
            committer_email=committer.get("email") or "",
            committer_name=committer.get("name") or "",
        )


@dataclass(frozen=True)
class Comment:
    id: int
    body: str


@dataclass(frozen=True)
class PRInfo:
    """Coordinates of a pull request."""

    org: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.org}/{self.repo}#{self.number}"


@dataclass
class PullRequest:
    """Pull request descriptor handed over by the event layer."""

    info: PRInfo
    author: str = ""
    state: str = "open"
    labels: set[str] = field(default_factory=set)

    @classmethod
    def from_api(cls, org: str, repo: str, data: dict) -> "PullRequest":
        """Build a descriptor from a pull request or issue object."""
        return cls(
            info=PRInfo(org=org, repo=repo, number=int(data["number"])),
            author=(data.get("user") or {}).get("login", ""),
            state=data.get("state", "open"),
            labels={label["name"] for label in data.get("labels") or [] if label.get("name")},
        )
