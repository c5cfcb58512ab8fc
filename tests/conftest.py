import subprocess

import pytest

from mysh.job_control import ProcessRegistry


def kill_all(reg):
    for proc in reg.snapshot_and_clear():
        proc.kill()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            pass


@pytest.fixture
def registry():
    """A registry whose leftover children are killed after the test"""
    reg = ProcessRegistry()
    yield reg
    kill_all(reg)
