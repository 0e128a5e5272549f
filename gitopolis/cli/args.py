"""Command-line argument parsing for gitopolis."""

import argparse

from gitopolis.__version__ import __version__
from gitopolis.constants import STATE_FILE_ENV, STATE_FILENAME


def _add_tag_filter(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-t",
        "--tag",
        action="append",
        dest="tags",
        metavar="TAG",
        help="Only repos with this tag. Repeat to require several tags (AND); "
        "join tags with commas to accept any of them (OR), e.g. --tag a,b",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitopolis",
        description="Manage many git working copies, their remotes and tags",
        epilog=f"State is kept in {STATE_FILENAME} in the current directory "
        f"(override with --state-file or {STATE_FILE_ENV}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"gitopolis {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--state-file", metavar="PATH", help="Registry file to use")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    add = subparsers.add_parser("add", help="Track working copies and their remotes")
    add.add_argument("paths", nargs="+", metavar="PATH")

    remove = subparsers.add_parser("remove", help="Stop tracking repos")
    remove.add_argument("names", nargs="+", metavar="NAME")

    tag = subparsers.add_parser("tag", help="Add a tag to repos")
    tag.add_argument("-r", "--remove", action="store_true", help="Remove the tag instead")
    tag.add_argument("tag_name", metavar="TAG")
    tag.add_argument("names", nargs="+", metavar="NAME")

    list_cmd = subparsers.add_parser("list", help="List tracked repos")
    _add_tag_filter(list_cmd)
    list_cmd.add_argument("-l", "--long", action="store_true", help="Show paths, tags and remotes")

    tags = subparsers.add_parser("tags", help="List tags in use")
    tags.add_argument("-l", "--long", action="store_true", help="Show the repos of each tag")

    show = subparsers.add_parser("show", help="Show one repo")
    show.add_argument("repo", metavar="NAME_OR_PATH")

    clone = subparsers.add_parser("clone", help="Clone tracked repos that are missing on disk")
    _add_tag_filter(clone)

    clone_add = subparsers.add_parser("clone-add", help="Clone a URL and track it")
    clone_add.add_argument("url", metavar="URL")
    clone_add.add_argument("--target", metavar="DIR", help="Directory to clone into")
    clone_add.add_argument(
        "-t", "--tag", action="append", dest="tags", default=[], metavar="TAG", help="Tag to apply"
    )

    move = subparsers.add_parser("move", help="Move a working copy and update the registry")
    move.add_argument("old_path", metavar="OLD")
    move.add_argument("new_path", metavar="NEW")

    sync = subparsers.add_parser("sync", help="Reconcile declared and live remotes")
    direction = sync.add_mutually_exclusive_group(required=True)
    direction.add_argument(
        "--read-remotes",
        action="store_true",
        help="Replace declared remotes with those configured in each working copy",
    )
    direction.add_argument(
        "--write-remotes",
        action="store_true",
        help="Add declared remotes missing from each working copy",
    )
    _add_tag_filter(sync)

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
