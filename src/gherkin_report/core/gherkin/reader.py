"""
Feature file reader.

Thin wrapper over the filesystem: lists feature files in a folder, reads
their text and splits it into lines. No parsing happens here.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".feature"


class Reader:
    """
    Read feature files from disk.

    Errors from the filesystem (missing folder, unreadable file) are not
    caught; they propagate as OSError to the caller.
    """

    def __init__(self, extension: str = DEFAULT_EXTENSION, recursive: bool = False):
        """
        Initialize the reader.

        Args:
            extension: File suffix that marks a feature file
            recursive: If True, also look inside subfolders
        """
        self.extension = extension
        self.recursive = recursive

    def list_feature_files(self, folder: str | Path) -> list[Path]:
        """
        List feature files in a folder, sorted by path.

        Args:
            folder: Folder to look in

        Returns:
            Paths of the feature files found

        Raises:
            FileNotFoundError: If the folder does not exist
            NotADirectoryError: If the path is not a folder
        """
        root = Path(folder)
        if not root.exists():
            raise FileNotFoundError(f"Feature folder not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a folder: {root}")

        pattern = f"*{self.extension}"
        candidates = root.rglob(pattern) if self.recursive else root.glob(pattern)
        files = sorted(path for path in candidates if path.is_file())
        logger.debug(f"Found {len(files)} feature files in {root}")
        return files

    def read_file_text(self, path: str | Path) -> str:
        """
        Read a whole file as UTF-8 text, dropping a leading BOM.

        Raises:
            OSError: If the file is missing or unreadable
        """
        return Path(path).read_text(encoding="utf-8-sig")

    def split_into_lines(self, text: str) -> list[str]:
        """Split text into lines, keeping blank lines."""
        return text.splitlines()
