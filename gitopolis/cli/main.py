"""Command-line entry point for gitopolis"""

import sys

from rich.console import Console
from rich.markup import escape

from gitopolis.cli.args import parse_args
from gitopolis.config import Config
from gitopolis.core import BulkResult, Gitopolis
from gitopolis.exceptions import GitopolisError
from gitopolis.logging_config import get_logger, setup_logging
from gitopolis.models.tag_filter import TagFilter
from gitopolis.services.display_service import DisplayService
from gitopolis.services.git_service import GitService
from gitopolis.services.storage_service import FileStorage

console = Console()
error_console = Console(stderr=True)
logger = get_logger(__name__)


def _bulk_exit_code(result: BulkResult, display: DisplayService) -> int:
    display.display_bulk_result(result)
    return 0 if result.ok else 1


def run(args, gitopolis: Gitopolis, display: DisplayService) -> int:
    """Dispatch a parsed command. Returns the process exit status."""
    command = args.command

    if command == "add":
        gitopolis.add(args.paths)
    elif command == "remove":
        gitopolis.remove(args.names)
    elif command == "tag":
        if args.remove:
            gitopolis.remove_tag(args.tag_name, args.names)
        else:
            gitopolis.add_tag(args.tag_name, args.names)
    elif command == "list":
        display.display_repo_list(gitopolis.list(TagFilter.from_args(args.tags)), long=args.long)
    elif command == "tags":
        if args.long:
            display.display_tags_long(gitopolis.repos_by_tag())
        else:
            display.display_tags(gitopolis.tags())
    elif command == "show":
        display.display_repo(gitopolis.show(args.repo))
    elif command == "clone":
        repos = gitopolis.list(TagFilter.from_args(args.tags))
        return _bulk_exit_code(gitopolis.clone(repos), display)
    elif command == "clone-add":
        path = gitopolis.clone_and_add(args.url, args.target, args.tags)
        logger.info(f"Added {path}")
    elif command == "move":
        gitopolis.move(args.old_path, args.new_path)
    elif command == "sync":
        tag_filter = TagFilter.from_args(args.tags)
        if args.read_remotes:
            result = gitopolis.sync_read_remotes(tag_filter)
        else:
            result = gitopolis.sync_write_remotes(tag_filter)
        return _bulk_exit_code(result, display)
    else:
        raise ValueError(f"Unknown command: {command}")

    return 0


def main(argv=None) -> int:
    """Main entry point for the application."""
    debug = False
    try:
        parsed_args = parse_args(argv)
        debug = parsed_args.debug

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = Config.from_env(
            state_file=parsed_args.state_file,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        gitopolis = Gitopolis(FileStorage(config.state_file), GitService(), config)
        display = DisplayService(console, verbose=config.verbose)
        return run(parsed_args, gitopolis, display)
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (GitopolisError, ValueError) as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        if debug:
            error_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
