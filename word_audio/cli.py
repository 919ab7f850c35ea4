"""Command line interface for the word audio tool"""

import argparse
import sys
import threading
from pathlib import Path
from typing import cast

from .config.settings import AppSettings
from .core.container import setup_default_container
from .core.factory import WordAudioApp, create_app
from .core.interfaces import StorageInterface, WorkspaceInterface
from .core.text_document import TextDocument
from .core.workspace import FileWorkspace
from .exceptions import WordAudioError
from .logging_config import get_logger, setup_logging
from .models.result_models import AnnotationResult, FolderAnnotationResult, SyncReport

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    defaults = AppSettings()
    parser = argparse.ArgumentParser(
        prog=Path(sys.argv[0]).name,
        description="Attach pronunciation audio blocks to vocabulary notes and cache the audio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  word-audio annotate words/wisdom.md          # Add blocks for every word in a note
  word-audio annotate words/day1.md --line 12  # Only the word on line 12
  word-audio sync words/day1.md                # Download missing audio for a note
  word-audio sync-folder                       # Download audio for the target folder
  word-audio watch words/day1.md               # Periodic background sync
  word-audio config set prefer_local true      # Change a setting
        """,
    )

    parser.add_argument(
        "--vault",
        type=Path,
        default=defaults.vault_dir,
        help="Root directory that note and cache paths are relative to",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help=f"Settings file (default: <vault>/{defaults.settings_file})",
    )

    log_group = parser.add_argument_group("logging options")
    log_group.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    log_group.add_argument("--debug", action="store_true", help="Enable debug logging")
    log_group.add_argument(
        "--log-file", type=Path, default=defaults.logging.file, help="Write logs to file"
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    annotate = commands.add_parser("annotate", help="Insert audio blocks into a note")
    annotate.add_argument("file", help="Note path inside the vault")
    annotate.add_argument(
        "--line", type=int, default=None, help="Only annotate this line (1-based)"
    )

    commands.add_parser(
        "annotate-folder", help="Insert audio blocks into every note of the target folder"
    )

    sync = commands.add_parser("sync", help="Download missing audio for notes")
    sync.add_argument("files", nargs="+", help="Note paths inside the vault")

    commands.add_parser(
        "sync-folder", help="Download missing audio for the target folder"
    )

    resolve = commands.add_parser("resolve", help="Show the audio source for words")
    resolve.add_argument("words", nargs="+")

    watch = commands.add_parser("watch", help="Run periodic sync for a note")
    watch.add_argument("file", help="Note treated as the active document")
    watch.add_argument(
        "--now", action="store_true", help="Run one sync immediately before waiting"
    )

    config = commands.add_parser("config", help="Show or change settings")
    config_commands = config.add_subparsers(dest="config_command", metavar="ACTION")
    config_commands.add_parser("show", help="Print the current settings")
    config_set = config_commands.add_parser("set", help="Change one setting")
    config_set.add_argument("key")
    config_set.add_argument("value")

    return parser


def print_annotation_result(result: AnnotationResult) -> None:
    """Print formatted annotation results"""
    if result.inserted > 0:
        message = f"✅ Inserted {result.inserted} audio blocks"
        if result.skipped > 0:
            message += f", skipped {result.skipped} words that already had one"
        print(message)
    elif result.skipped > 0:
        print(f"⏭️ All words already have audio blocks, skipped {result.skipped}")
    else:
        print("ℹ️ No words needing an audio block were found")

    if result.inserted_words:
        print(f"🔊 Downloaded {result.downloaded} audio files")


def print_folder_result(result: FolderAnnotationResult) -> None:
    print("\n" + "=" * 60)
    print("📊 FOLDER SUMMARY")
    print("=" * 60)
    print(f"Files scanned: {result.files_total}")
    print(f"Files modified: {result.files_modified}")
    print(f"✅ Blocks inserted: {result.inserted}")
    print(f"⏭️ Skipped: {result.skipped}")
    print(f"🔊 Downloaded: {result.downloaded}")
    if result.errors:
        print("\n❌ Errors:")
        for error in result.errors:
            print(f"  - {error}")
    print("=" * 60)


def print_sync_report(report: SyncReport) -> None:
    """Print formatted synchronization results"""
    if report.busy:
        print("⏳ Another sync is already running, nothing done")
        return
    print(f"✅ Downloaded: {report.downloaded}")
    print(f"⏭️ Already cached: {report.skipped}")
    print(f"❌ Failed: {report.failed}")
    if report.deferred:
        print(f"⏸️ Deferred to the next run: {report.deferred}")
    if report.failed_words:
        print("\n❌ Failed words: " + ", ".join(report.failed_words))


def annotate_main(app: WordAudioApp, storage: StorageInterface, args: argparse.Namespace) -> None:
    if not storage.exists(args.file):
        raise WordAudioError(f"File not found: {args.file}")
    document = TextDocument(storage.read(args.file))

    if args.line is not None:
        if not 1 <= args.line <= document.line_count():
            raise WordAudioError(
                f"Line {args.line} is outside the note (1-{document.line_count()})"
            )
        result = app.service.annotate_current_line(document, args.line - 1)
    else:
        result = app.service.annotate_document(document)

    if result.modified:
        storage.write(args.file, document.get_value())
    print_annotation_result(result)


def sync_main(app: WordAudioApp, storage: StorageInterface, args: argparse.Namespace) -> SyncReport:
    matcher = app.service.matcher()
    words: dict[str, None] = {}
    for path in args.files:
        if not storage.exists(path):
            logger.error(f"File not found (ignored): {path}")
            continue
        for word in matcher.collect_words(storage.read(path)):
            words.setdefault(word, None)

    if not words:
        print("ℹ️ No words found")
        return SyncReport()
    print(f"Downloading audio for {len(words)} words...")
    report = app.service.synchronizer.sync_with_report(list(words))
    print_sync_report(report)
    return report


def watch_main(app: WordAudioApp, workspace: WorkspaceInterface, args: argparse.Namespace) -> None:
    if isinstance(workspace, FileWorkspace):
        workspace.open(args.file)
    interval = app.store.current().sync_interval_minutes
    if args.now:
        count = app.scheduler.tick()
        print(f"🔊 Downloaded {count} audio files")
    app.scheduler.enable(interval)
    print(f"⏱️ Syncing {args.file} every {interval} minutes, press Ctrl+C to stop")
    try:
        threading.Event().wait()
    finally:
        app.shutdown()


def config_main(app: WordAudioApp, args: argparse.Namespace) -> None:
    if args.config_command == "set":
        app.store.update(**{args.key: args.value})
        print(f"✅ {args.key} updated")
    for key, value in app.store.current().model_dump().items():
        print(f"  {key}: {value}")


def main() -> None:
    """Main entry point for the CLI"""
    parser = create_parser()

    if len(sys.argv) == 1:
        parser.print_help()
        sys.exit(0)

    args = parser.parse_args()

    log_level = "DEBUG" if (args.debug or args.verbose) else AppSettings().logging.level
    setup_logging(log_level, str(args.log_file) if args.log_file else None)

    if not args.command:
        parser.error("Provide a command")

    try:
        settings_file = args.settings or args.vault / AppSettings().settings_file
        container = setup_default_container(args.vault, settings_file)
        app = create_app(container)
        storage = cast(StorageInterface, container.get(StorageInterface))

        if args.command == "annotate":
            annotate_main(app, storage, args)
        elif args.command == "annotate-folder":
            result = app.service.annotate_folder()
            print_folder_result(result)
            if result.errors:
                sys.exit(1)
        elif args.command == "sync":
            if sync_main(app, storage, args).failed > 0:
                sys.exit(1)
        elif args.command == "sync-folder":
            report = app.service.sync_folder()
            print_sync_report(report)
            if report.failed > 0:
                sys.exit(1)
        elif args.command == "resolve":
            for word, url in app.service.resolver.resolve_many(args.words).items():
                print(f"{word}: {url}")
        elif args.command == "watch":
            watch_main(app, cast(WorkspaceInterface, container.get(WorkspaceInterface)), args)
        elif args.command == "config":
            config_main(app, args)

    except WordAudioError as e:
        logger.error(f"Application error: {e}")
        if args.debug:
            logger.exception("Full traceback:")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if args.debug or args.verbose:
            logger.exception("Full traceback:")
        sys.exit(1)


if __name__ == "__main__":
    main()
