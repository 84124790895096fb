"""Tests for the GitHub REST client."""

import unittest
from unittest.mock import Mock

import requests

from clabot.errors import GitHubAPIError
from clabot.github_client import GitHubClient
from clabot.models import PRInfo

PR = PRInfo("org", "repo", 5)
API = "https://api.github.com"


def _response(status=200, json_data=None, links=None, text=""):
    response = Mock()
    response.status_code = status
    response.ok = 200 <= status < 400
    response.json.return_value = json_data
    response.links = links or {}
    response.text = text
    return response


class TestGitHubClient(unittest.TestCase):
    def setUp(self):
        self.session = Mock()
        self.session.headers = {}
        self.client = GitHubClient("secret", api_url=API, session=self.session)

    def test_auth_headers(self):
        self.assertEqual(self.session.headers["Authorization"], "token secret")
        self.assertEqual(self.session.headers["Accept"], "application/vnd.github+json")

    def test_add_label(self):
        self.session.request.return_value = _response(json_data=[])
        self.client.add_label(PR, "cla/yes")
        self.session.request.assert_called_once_with(
            "POST", f"{API}/repos/org/repo/issues/5/labels", timeout=30, json={"labels": ["cla/yes"]}
        )

    def test_remove_label_quotes_name(self):
        self.session.request.return_value = _response()
        self.client.remove_label(PR, "cla/yes")
        args = self.session.request.call_args[0]
        self.assertEqual(args, ("DELETE", f"{API}/repos/org/repo/issues/5/labels/cla%2Fyes"))

    def test_remove_missing_label_is_ok(self):
        self.session.request.return_value = _response(404, text="Label does not exist")
        self.client.remove_label(PR, "cla/yes")

    def test_error_carries_status_and_body(self):
        self.session.request.return_value = _response(403, text="forbidden")
        with self.assertRaises(GitHubAPIError) as ctx:
            self.client.create_comment(PR, "hi")
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertIn("forbidden", str(ctx.exception))

    def test_transport_error(self):
        self.session.request.side_effect = requests.ConnectionError("down")
        with self.assertRaises(GitHubAPIError) as ctx:
            self.client.delete_comment("org", "repo", 9)
        self.assertIsNone(ctx.exception.status_code)

    def test_list_commits_follows_pagination(self):
        page1 = [
            {
                "sha": "a" * 40,
                "commit": {
                    "message": "first",
                    "author": {"email": "a@x.com"},
                    "committer": {"email": "c@x.com", "name": "C"},
                },
            }
        ]
        page2 = [{"sha": "b" * 40, "commit": {"message": "second", "author": None}}]
        next_url = f"{API}/repositories/1/pulls/5/commits?per_page=100&page=2"
        self.session.request.side_effect = [
            _response(json_data=page1, links={"next": {"url": next_url}}),
            _response(json_data=page2),
        ]

        commits = self.client.list_commits(PR)

        self.assertEqual([c.message for c in commits], ["first", "second"])
        self.assertEqual(commits[0].author_email, "a@x.com")
        self.assertEqual(commits[0].committer_name, "C")
        self.assertEqual(commits[1].author_email, "")
        second_call = self.session.request.call_args_list[1]
        self.assertEqual(second_call[0], ("GET", next_url))
        self.assertIsNone(second_call[1]["params"])

    def test_list_comments(self):
        self.session.request.return_value = _response(json_data=[{"id": 1, "body": "hi"}, {"id": 2, "body": None}])
        comments = self.client.list_comments(PR)
        self.assertEqual([(c.id, c.body) for c in comments], [(1, "hi"), (2, "")])

    def test_get_pull_request(self):
        self.session.request.return_value = _response(
            json_data={"number": 5, "state": "open", "user": {"login": "dev"}, "labels": [{"name": "cla/no"}]}
        )
        pr = self.client.get_pull_request(PR)
        self.assertEqual(pr.info, PR)
        self.assertEqual(pr.author, "dev")
        self.assertEqual(pr.labels, {"cla/no"})


if __name__ == "__main__":
    unittest.main()
