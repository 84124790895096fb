"""Exception hierarchy for the CLA robot."""


class CLAError(Exception):
    """Base class for all robot errors."""

    pass


class ConfigError(CLAError):
    """Raised when the configuration file cannot be loaded or is invalid."""

    pass


class ConfigMissingError(CLAError):
    """Raised when no configuration item covers an org/repo pair."""

    def __init__(self, org: str, repo: str):
        self.org = org
        self.repo = repo
        super().__init__(f"no config for this repo: {org}/{repo}")


class EmptyCommitSetError(CLAError):
    """Raised when a pull request has no commits to check."""

    def __init__(self):
        super().__init__("commits is empty, cla cannot be checked")


class InvalidCommitIdentityError(CLAError):
    """Raised when a commit with an empty SHA slipped into the unsigned set."""

    def __init__(self):
        super().__init__("invalid commit exists")


class OracleError(CLAError):
    """Base class for signing registry failures."""

    pass


class OracleTransportError(OracleError):
    """The signing registry could not be reached."""

    pass


class OracleProtocolError(OracleError):
    """The signing registry answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"response has status {status_code} and body {body!r}")


class OracleDecodeError(OracleError):
    """The signing registry answered with a body of the wrong shape."""

    pass


class LabelMutationError(CLAError):
    """A label could not be added or removed.

    ``fully_signed`` carries the verdict that was reached before the
    mutation failed, so callers can still tell a compliant PR apart.
    """

    def __init__(self, label: str, operation: str, cause: Exception, fully_signed: bool = False):
        self.label = label
        self.operation = operation
        self.cause = cause
        self.fully_signed = fully_signed
        super().__init__(f"Could not {operation} {label} label, err: {cause}")


class GitHubAPIError(CLAError):
    """A GitHub REST call failed."""

    def __init__(self, method: str, url: str, status_code: int | None, body: str = ""):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"{method} {url} failed with status {status_code}: {body}")
