import logging
import shutil
from pathlib import Path

import pytest

from comchemkit.parsers.gaussian import GaussianProgram
from comchemkit.utils import logger

logger.setLevel(logging.CRITICAL)  # Keep test output clean

GAUSSIAN_DATA_DIR = Path(__file__).resolve().parent / "data" / "gaussian"


@pytest.fixture(scope="session")
def gaussian() -> GaussianProgram:
    return GaussianProgram()


@pytest.fixture(scope="session")
def gaussian_data() -> Path:
    return GAUSSIAN_DATA_DIR


@pytest.fixture
def write_log(tmp_path: Path):
    """Writes ``content`` to a file under tmp_path and returns its path."""

    def _write(content: str, name: str = "job.log") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="latin-1")
        return path

    return _write


@pytest.fixture
def batch_dir(tmp_path: Path) -> Path:
    """A directory with one good, one failed and one non-Gaussian output."""
    target = tmp_path / "batch"
    target.mkdir()
    shutil.copy(GAUSSIAN_DATA_DIR / "opt_freq.log", target / "water.log")
    shutil.copy(GAUSSIAN_DATA_DIR / "interrupted.log", target / "radical.log")
    shutil.copy(GAUSSIAN_DATA_DIR / "error.log", target / "broken.log")
    shutil.copy(GAUSSIAN_DATA_DIR / "pcm_failure.log", target / "solvated.log")
    shutil.copy(GAUSSIAN_DATA_DIR / "not_gaussian.out", target / "orca_job.out")
    return target
