import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bitdataview import BitDataView  # noqa: E402

MODES = [
    ("lsb", "little"),
    ("lsb", "big"),
    ("msb", "little"),
    ("msb", "big"),
]


def make_view(numbering: str = "lsb", order: str = "little", source=None):
    """Build a view with the given bit numbering and byte order."""
    view = BitDataView(source)
    if numbering == "msb":
        view.bit_numbering.set_msb()
    if order == "big":
        view.endianness.set_big_endian()
    return view


def assert_invariant(view):
    """Check the counter invariant every public call must keep."""
    assert 0 <= view.shifted_bit_count <= view.pushed_bit_count
    assert view.pushed_bit_count <= view.bit_capacity
    assert view.bit_capacity <= len(view.storage) * 8


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def view():
    """Fresh auto-expanding view, LSB and little-endian."""
    return BitDataView()


@pytest.fixture(params=MODES, ids=["-".join(mode) for mode in MODES])
def any_view(request):
    """Fresh auto-expanding view, once per bit numbering/byte order pair."""
    return make_view(*request.param)


@pytest.fixture()
def big_view():
    """Fixed 6400-bit view with every bit already stored."""
    v = BitDataView(6400)
    v.push_nothing(6400)
    return v


@pytest.fixture()
def check_invariant():
    """Provide the invariant assertion without importing conftest."""
    return assert_invariant


@pytest.fixture()
def sample_file(tmp_path: Path):
    """Write a small binary file for CLI tests.

    Content: ``78 56 34 12 ff 00``.
    """
    path = tmp_path / "sample.bin"
    path.write_bytes(bytes([0x78, 0x56, 0x34, 0x12, 0xFF, 0x00]))
    return path
