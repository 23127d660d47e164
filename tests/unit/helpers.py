import shutil
import tempfile
from pathlib import Path

FIXTURE_ROOT = Path(__file__).resolve().parent.parent / "fixtures" / "release"


def copy_release_fixture():
    """Copy the sample release tree into a fresh temporary directory."""
    temp_dir = Path(tempfile.mkdtemp(prefix="zoipack_test_"))
    shutil.copytree(FIXTURE_ROOT, temp_dir / "project")
    return temp_dir, temp_dir / "project"
