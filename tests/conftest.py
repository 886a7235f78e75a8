import os
import shutil

import pytest

from mishell.shell import Session


def find_bin_dir(*tools):
    """A directory holding every tool, for the fixed-prefix lookup."""
    path = shutil.which(tools[0])
    if path is None:
        return None
    bin_dir = os.path.dirname(path)
    if all(os.access(os.path.join(bin_dir, t), os.X_OK) for t in tools):
        return bin_dir
    return None


TOOLS = ("cat", "echo", "tr", "sort", "rev", "head", "sleep", "true", "false", "yes")
BIN_DIR = find_bin_dir(*TOOLS)


@pytest.fixture()
def sandbox(tmp_path, monkeypatch):
    # Work in an isolated temp directory
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture()
def session(sandbox):
    if BIN_DIR is None:
        pytest.skip("coreutils not found in a single directory")
    sess = Session(bin_dir=BIN_DIR)
    yield sess
    sess.jobs.cleanup()
