"""Command line entry point for the CLA robot."""

import argparse
import json
import logging
import os
import sys

from rich.console import Console

from clabot.config import Configuration
from clabot.errors import CLAError
from clabot.github_client import GitHubClient
from clabot.models import PRInfo
from clabot.robot import CLARobot

console = Console(stderr=True)


def _get_env(key: str) -> str | None:
    value = os.environ.get(key)
    if not value:
        console.print(f"[red]Error: {key} environment variable not set[/red]")
    return value


def _build_robot(args: argparse.Namespace) -> CLARobot | None:
    token = _get_env("GITHUB_TOKEN")
    if not token:
        return None
    config = Configuration.load(args.config)
    return CLARobot(GitHubClient(token), config)


def _report(signed: bool | None, fail_on_unsigned: bool = False) -> int:
    if signed is None:
        console.print("[dim]Event ignored[/dim]")
        return 0
    if signed:
        console.print("[green]✓ All authors of the commits have signed the CLA[/green]")
        return 0

    console.print("[yellow]✗ Some commits are not covered by a signed CLA[/yellow]")
    return 1 if fail_on_unsigned else 0


def cmd_check(args: argparse.Namespace) -> int:
    robot = _build_robot(args)
    if robot is None:
        return 1

    info = PRInfo(org=args.org, repo=args.repo, number=args.number)
    pr = robot.client.get_pull_request(info)
    cfg = robot.get_config(info.org, info.repo)

    console.print(f"Checking CLA for PR [bold]{info}[/bold]")
    if args.recheck_by:
        signed = robot.recheck(pr, cfg, args.recheck_by)
    else:
        signed = robot.handle(pr, cfg)
    return _report(signed, args.fail_on_unsigned)


def cmd_event(args: argparse.Namespace) -> int:
    name = args.name or _get_env("GITHUB_EVENT_NAME")
    path = args.payload or _get_env("GITHUB_EVENT_PATH")
    if not name or not path:
        return 1

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: could not read event payload {path}: {e}[/red]")
        return 1

    robot = _build_robot(args)
    if robot is None:
        return 1

    return _report(robot.dispatch(name, payload), args.fail_on_unsigned)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="clabot",
        description="Check the CLA status of GitHub pull requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  clabot check myorg myrepo 42
  clabot check myorg myrepo 42 --recheck-by octocat
  clabot event --name pull_request --payload event.json

Environment Variables:
  GITHUB_TOKEN        Token used to update labels and comments
  GITHUB_API_URL      GitHub REST base URL (default: https://api.github.com)
  CLABOT_CONFIG       Configuration file (default: clabot.json)
        """,
    )
    parser.add_argument("--config", help="Path to the JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    gate_parser = argparse.ArgumentParser(add_help=False)
    gate_parser.add_argument(
        "--fail-on-unsigned", action="store_true", help="Exit with status 1 if commits are unsigned"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check", parents=[gate_parser], help="Check a single pull request"
    )
    check_parser.add_argument("org", help="Repository owner")
    check_parser.add_argument("repo", help="Repository name")
    check_parser.add_argument("number", type=int, help="Pull request number")
    check_parser.add_argument("--recheck-by", help="Acknowledge this user if all commits are signed")

    event_parser = subparsers.add_parser(
        "event", parents=[gate_parser], help="Handle a GitHub webhook payload"
    )
    event_parser.add_argument("--name", help="Event name (default: $GITHUB_EVENT_NAME)")
    event_parser.add_argument("--payload", help="Payload file (default: $GITHUB_EVENT_PATH)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "check":
            return cmd_check(args)
        if args.command == "event":
            return cmd_event(args)
    except CLAError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
