"""
Text resources (stylesheets, scripts) loaded from disk and optionally kept fresh.

A :class:`ResourceManager` watches registered files with a polling observer
that compares modification times every ``interval`` seconds on its own
thread. New file contents are pushed to the owning :class:`Resource` through
a queue; the resource picks them up the next time :meth:`Resource.get` is
called.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
import weakref
from pathlib import Path
from typing import Dict, List, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers.polling import PollingObserver

__all__ = ["Resource", "ResourceManager"]

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_CLOSED = object()


class Resource:
    """Latest known text of a file; only its owner should call :meth:`get`."""

    def __init__(self, text: str, updates: Optional["queue.SimpleQueue[object]"] = None) -> None:
        self._text = text
        self._updates = updates

    @property
    def watched(self) -> bool:
        return self._updates is not None

    def get(self) -> str:
        """Apply pending updates and return the current text."""

        updates = self._updates
        if updates is None:
            return self._text
        while True:
            try:
                item = updates.get_nowait()
            except queue.Empty:
                break
            if item is _CLOSED:
                self._updates = None
                continue
            self._text = str(item)
        return self._text


class _ResourceWatch:
    """One watched file and the resource its new contents go to."""

    def __init__(self, path: Path, mtime_ns: int, resource: Resource, updates: "queue.SimpleQueue[object]") -> None:
        self.path = path
        self.mtime_ns = mtime_ns
        self._resource = weakref.ref(resource)
        self._updates = updates

    @property
    def alive(self) -> bool:
        return self._resource() is not None

    def check_update(self) -> bool:
        """Publish the file's text when it changed since the last check."""

        mtime_ns = self.path.stat().st_mtime_ns
        if mtime_ns <= self.mtime_ns:
            return False
        self.mtime_ns = mtime_ns
        text = self.path.read_text(encoding="utf-8")
        if not self.alive:
            logger.warning("Resource can't be updated: %s", self.path)
            return False
        self._updates.put(text)
        logger.info("Resource updated: %s", self.path)
        return True

    def close(self) -> None:
        self._updates.put(_CLOSED)


class _WatchEventHandler(FileSystemEventHandler):
    def __init__(self, manager: "ResourceManager") -> None:
        self._manager = manager

    def on_modified(self, event: FileSystemEvent) -> None:
        self._manager._dispatch(os.fsdecode(event.src_path))

    def on_created(self, event: FileSystemEvent) -> None:
        self._manager._dispatch(os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        self._manager._dispatch(os.fsdecode(getattr(event, "dest_path", event.src_path)))


class ResourceManager:
    """
    Loads resources and republishes changed files to their resources.

    Use as a context manager, or call :meth:`close`, to stop the observer
    thread.
    """

    def __init__(self, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.interval = interval
        self._lock = threading.Lock()
        self._watches: Dict[str, List[_ResourceWatch]] = {}
        self._dirs: set[str] = set()
        self._handler = _WatchEventHandler(self)
        self._observer: Optional[PollingObserver] = None
        self._closed = False

    def __enter__(self) -> "ResourceManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _ensure_observer(self) -> PollingObserver:
        if self._observer is None:
            self._observer = PollingObserver(timeout=self.interval)
            self._observer.start()
        return self._observer

    def empty(self) -> Resource:
        return Resource("")

    def register(self, path: PathLike, updates: bool = False) -> Resource:
        """
        Read ``path`` and return it as a resource.

        With ``updates`` the file is watched and later changes reach the
        resource. Once the manager is closed, new resources are never watched.

        Raises:
            OSError: If the file cannot be read.
        """

        file_path = Path(path).resolve()
        mtime_ns = file_path.stat().st_mtime_ns
        text = file_path.read_text(encoding="utf-8")
        if not updates or self._closed:
            return Resource(text)

        channel: "queue.SimpleQueue[object]" = queue.SimpleQueue()
        resource = Resource(text, channel)
        watch = _ResourceWatch(file_path, mtime_ns, resource, channel)
        key = str(file_path)
        directory = str(file_path.parent)
        with self._lock:
            self._watches.setdefault(key, []).append(watch)
            if directory not in self._dirs:
                self._dirs.add(directory)
                self._ensure_observer().schedule(self._handler, directory, recursive=False)
        logger.debug("Watching %s every %.2fs", file_path, self.interval)
        return resource

    def _check(self, watch: _ResourceWatch) -> bool:
        try:
            return watch.check_update()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Update failed for %s: %s", watch.path, exc)
            return False

    def _dispatch(self, src_path: str) -> None:
        key = str(Path(src_path).resolve())
        with self._lock:
            watches = self._watches.get(key)
            if not watches:
                return
            for watch in watches:
                self._check(watch)
            self._prune(key)

    def _prune(self, key: str) -> None:
        alive = [watch for watch in self._watches.get(key, []) if watch.alive]
        if alive:
            self._watches[key] = alive
        else:
            self._watches.pop(key, None)

    def poll(self) -> int:
        """Check every watched file now; return the number of published updates."""

        published = 0
        with self._lock:
            for key in list(self._watches):
                for watch in self._watches[key]:
                    if self._check(watch):
                        published += 1
                self._prune(key)
        return published

    def close(self) -> None:
        """Stop watching; resources keep the last text they received."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            observer = self._observer
            self._observer = None
            for watches in self._watches.values():
                for watch in watches:
                    watch.close()
            self._watches.clear()
        if observer is not None:
            observer.stop()
            observer.join()
