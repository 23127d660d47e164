import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import git

from zoipack.repository import ProjectLocator


class TestProjectLocator(unittest.TestCase):

    def setUp(self):
        self.locator = ProjectLocator()

    @patch('zoipack.repository.Repo')
    def test_finds_enclosing_work_tree(self, mock_repo_cls):
        mock_repo_cls.return_value = MagicMock(working_tree_dir="/work/zoi")

        root = self.locator.locate(start="/work/zoi/packages/brew")

        self.assertEqual(root, Path("/work/zoi"))
        self.assertTrue(self.locator.from_git)
        mock_repo_cls.assert_called_once_with(
            Path("/work/zoi/packages/brew").resolve(), search_parent_directories=True
        )

    @patch('zoipack.repository.Repo')
    def test_falls_back_to_start_outside_git(self, mock_repo_cls):
        mock_repo_cls.side_effect = git.exc.InvalidGitRepositoryError("/tmp/plain")

        root = self.locator.locate(start="/tmp/plain")

        self.assertEqual(root, Path("/tmp/plain").resolve())
        self.assertFalse(self.locator.from_git)

    @patch('zoipack.repository.Repo')
    def test_bare_repository_falls_back_to_start(self, mock_repo_cls):
        mock_repo_cls.return_value = MagicMock(working_tree_dir=None)
        root = self.locator.locate(start="/srv/zoi.git")
        self.assertEqual(root, Path("/srv/zoi.git").resolve())
        self.assertFalse(self.locator.from_git)

    @patch('zoipack.repository.Repo')
    @patch('zoipack.repository.Path')
    def test_explicit_root_skips_git(self, mock_path_cls, mock_repo_cls):
        mock_path_instance = MagicMock(spec=Path)
        mock_path_instance.exists.return_value = True
        mock_path_instance.is_dir.return_value = True
        mock_path_cls.return_value = mock_path_instance

        root = self.locator.locate("/explicit/root")

        self.assertIs(root, mock_path_instance)
        mock_repo_cls.assert_not_called()

    @patch('zoipack.repository.Path')
    def test_explicit_root_not_exists(self, mock_path_cls):
        mock_path_instance = MagicMock(spec=Path)
        mock_path_instance.exists.return_value = False
        mock_path_cls.return_value = mock_path_instance

        with self.assertRaises(ValueError) as context:
            self.locator.locate("/does/not/exist")
        self.assertIn("Project root does not exist", str(context.exception))

    @patch('zoipack.repository.Path')
    def test_explicit_root_is_file(self, mock_path_cls):
        mock_path_instance = MagicMock(spec=Path)
        mock_path_instance.exists.return_value = True
        mock_path_instance.is_dir.return_value = False
        mock_path_cls.return_value = mock_path_instance

        with self.assertRaises(ValueError) as context:
            self.locator.locate("/some/file.toml")
        self.assertIn("not a directory", str(context.exception))


if __name__ == '__main__':
    unittest.main()
