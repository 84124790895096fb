"""Comment bodies posted by the robot."""

from collections.abc import Mapping

MAX_LENGTH_OF_SHA = 8

CHECK_CLA_COMMAND = "/check-cla"

SIGN_GUIDE_TITLE = (
    "Thanks for your pull request.\n\n"
    "The authors of the following commits have not signed the "
    "Contributor License Agreement (CLA):"
)

# Title used by earlier releases; still purged.
LEGACY_SIGN_GUIDE_TITLE = (
    "Thanks for your pull request. Before we can look at your pull request, "
    "you'll need to sign a Contributor License Agreement (CLA)."
)

SIGN_GUIDE_TEMPLATE = """{title}

{commits}

Please check the [**FAQs**]({faq_url}) first.
You can click [**here**]({sign_url}) to sign the CLA. After signing the CLA, you must comment "{command}" to check the CLA status again."""

ALREADY_SIGNED_TEMPLATE = (
    "***@{user}***, thanks for your pull request. "
    "All authors of the commits have signed the CLA. :wave: "
)


def short_sha(sha: str) -> str:
    return sha[:MAX_LENGTH_OF_SHA]


def generate_unsigned_comment(commits: Mapping[str, str]) -> str:
    """Render one ``**<sha>** | <message>`` line per unsigned commit."""
    return "\n".join(f"**{short_sha(sha)}** | {message}" for sha, message in commits.items())


def sign_guide(sign_url: str, commits: Mapping[str, str], faq_url: str) -> str:
    return SIGN_GUIDE_TEMPLATE.format(
        title=SIGN_GUIDE_TITLE,
        commits=generate_unsigned_comment(commits),
        faq_url=faq_url,
        sign_url=sign_url,
        command=CHECK_CLA_COMMAND,
    )


def already_signed(user: str) -> str:
    return ALREADY_SIGNED_TEMPLATE.format(user=user)


def is_sign_guide(body: str) -> bool:
    """True if ``body`` is a guidance comment of this or an earlier release."""
    return body.startswith(SIGN_GUIDE_TITLE) or body.startswith(LEGACY_SIGN_GUIDE_TITLE)
