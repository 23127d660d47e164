"""
Project Root Module for the zoipack tools.

This module decides which working tree the release artifacts are read from.
"""

import logging
from pathlib import Path

import git
from git import Repo


class ProjectLocator:
    """
    Resolves the project root from an explicit path or the enclosing git work tree.
    """

    def __init__(self):
        """Initialize the project locator."""
        self.root = None
        self.from_git = False
        self.logger = logging.getLogger(__name__)

    def locate(self, root=None, start="."):
        """
        Determine the project root.

        Args:
            root (str | Path | None): Explicit root given on the command line.
            start (str | Path): Directory to search upwards from when no root is given.

        Returns:
            Path: The project root.

        Raises:
            ValueError: If an explicit root is not an existing directory.
        """
        if root is not None:
            return self.validate_local_path(root)
        return self.find_work_tree(start)

    def find_work_tree(self, start="."):
        """
        Return the top of the git work tree containing `start`, or `start` itself
        when it is not inside a repository.
        """
        start_path = Path(start).resolve()
        try:
            repo = Repo(start_path, search_parent_directories=True)
            work_tree = repo.working_tree_dir
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            work_tree = None

        if work_tree is None:
            self.logger.debug(f"{start_path} is not inside a git work tree")
            self.root = start_path
            self.from_git = False
        else:
            self.root = Path(work_tree)
            self.from_git = True
            self.logger.debug(f"Using git work tree at {self.root}")
        return self.root

    def validate_local_path(self, path):
        """
        Ensure an explicit project root exists and is a directory.

        Raises:
            ValueError: If the path is not valid.
        """
        root_path = Path(path)

        if not root_path.exists():
            self.logger.error(f"Path does not exist: {path}")
            raise ValueError(f"Project root does not exist: {path}")

        if not root_path.is_dir():
            self.logger.error(f"Path is not a directory: {path}")
            raise ValueError(f"Project root is not a directory: {path}")

        self.root = root_path
        self.from_git = False
        return self.root
