"""Debounced file watcher that asks for a fresh analysis once a project settles."""

import logging
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from ..parser.languages import is_text_file, should_ignore_path

logger = logging.getLogger(__name__)

UPSERT = "upsert"
DELETE = "delete"

ChangeCallback = Callable[[dict[str, str]], None]


class DebouncedFileHandler(FileSystemEventHandler):
    """Collects changes to inventoried files and reports them in batches.

    Any import can change any blast radius, so consumers rebuild the whole
    graph per batch. Waiting for a quiet period keeps a git checkout or a
    formatter run down to a single rebuild.
    """

    def __init__(
        self,
        root: Path,
        on_changes_callback: ChangeCallback,
        debounce_seconds: float = 5.0,
    ):
        """Initialize the handler.

        Args:
            root: Project root; ignore rules apply to paths relative to it
            on_changes_callback: Called with a dict of path -> "upsert" or "delete"
            debounce_seconds: Quiet period before a batch is reported
        """
        super().__init__()
        self._root = Path(root)
        self._callback = on_changes_callback
        self._debounce_seconds = debounce_seconds

        self._pending: dict[str, str] = {}
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    @property
    def pending_changes(self) -> dict[str, str]:
        """Snapshot of changes waiting for the quiet period to end."""
        with self._lock:
            return dict(self._pending)

    def is_relevant(self, path: str) -> bool:
        """Check if a path belongs to the scanned inventory of the project."""
        path_obj = Path(path)
        try:
            relative = path_obj.relative_to(self._root)
        except ValueError:
            return False
        return not should_ignore_path(relative) and is_text_file(path_obj)

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Translate watchdog events into queued upserts and deletes."""
        if event.is_directory:
            return

        if event.event_type == EVENT_TYPE_MOVED:
            self.queue_change(event.src_path, DELETE)
            self.queue_change(event.dest_path, UPSERT)
        elif event.event_type in (EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED):
            self.queue_change(event.src_path, UPSERT)
        elif event.event_type == EVENT_TYPE_DELETED:
            self.queue_change(event.src_path, DELETE)

    def queue_change(self, path: str | bytes, change_type: str) -> None:
        """Record a change and push the flush back by the debounce delay.

        Args:
            path: Changed file (watchdog may report bytes)
            change_type: "upsert" or "delete"
        """
        if isinstance(path, bytes):
            path = path.decode("utf-8", errors="replace")
        if not self.is_relevant(path):
            return

        with self._lock:
            self._pending[path] = change_type
            self._restart_timer()
            pending_count = len(self._pending)

        logger.debug(f"Queued {change_type} for {path} ({pending_count} pending)")

    def _restart_timer(self) -> None:
        # Caller holds self._lock
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(self._debounce_seconds, self.flush)
        self._timer.daemon = True
        self._timer.start()

    def flush(self) -> None:
        """Report pending changes now.

        Change types are re-checked against the disk, since editors that
        save atomically produce a delete followed by a create.
        """
        with self._lock:
            if not self._pending:
                return
            paths = list(self._pending)
            self._pending.clear()
            self._timer = None

        changes = {path: UPSERT if Path(path).exists() else DELETE for path in paths}
        logger.info(f"Processing {len(changes)} file changes")

        try:
            self._callback(changes)
        except Exception as e:
            logger.error(f"Error processing file changes: {e}")

    def stop(self) -> None:
        """Cancel a pending flush, keeping the queued changes."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class FileWatcher:
    """Runs a watchdog observer over a project with a debounced handler."""

    def __init__(
        self,
        project_path: Path,
        on_changes: ChangeCallback,
        debounce_seconds: float = 5.0,
    ):
        self._project_path = Path(project_path)
        self._handler = DebouncedFileHandler(
            root=self._project_path,
            on_changes_callback=on_changes,
            debounce_seconds=debounce_seconds,
        )
        self._observer = Observer()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start observing the project directory."""
        if self._running:
            logger.warning("FileWatcher is already running")
            return

        self._observer.schedule(self._handler, str(self._project_path), recursive=True)
        self._observer.start()
        self._running = True
        logger.info(f"Watching {self._project_path} for changes")

    def stop(self) -> None:
        """Stop observing and drop any pending flush."""
        if not self._running:
            return

        self._handler.stop()
        self._observer.stop()
        self._observer.join(timeout=5.0)
        self._running = False
        logger.info("FileWatcher stopped")

    def __enter__(self) -> "FileWatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
