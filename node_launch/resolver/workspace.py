"""Editor workspace state the resolver reads."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
import os


@dataclass(frozen=True)
class WorkspaceFolder:
    """A root folder open in the editor."""

    path: str
    name: str = ""


@dataclass(frozen=True)
class TextDocument:
    """A document open in the editor."""

    path: str
    language_id: str


@dataclass
class Workspace:
    """Snapshot of the editor state relevant to launch configurations."""

    folders: list[WorkspaceFolder] = field(default_factory=list)
    active_document: TextDocument | None = None
    text_documents: list[TextDocument] = field(default_factory=list)
    log_directory: str | None = None

    def folder_for(self, path: str) -> WorkspaceFolder | None:
        """Return the workspace folder containing ``path``, the innermost one if nested."""
        best: WorkspaceFolder | None = None
        for folder in self.folders:
            root = os.path.normpath(folder.path)
            candidate = os.path.normpath(path)
            if candidate == root or candidate.startswith(root + os.sep):
                if best is None or len(root) > len(os.path.normpath(best.path)):
                    best = folder
        return best

    def as_relative_path(self, path: str) -> str:
        """Path relative to its workspace folder, or ``path`` unchanged if outside all folders."""
        folder = self.folder_for(path)
        if folder is None:
            return path
        return os.path.relpath(path, folder.path).replace(os.sep, "/")
