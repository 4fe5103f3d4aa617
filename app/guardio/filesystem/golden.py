"""Golden file fixtures for tests.

A golden file stores the reference output of a testcase. Testcases write
their reference data once with create_golden_file and compare later runs
against it with eval_golden_file. Newlines are normalized before the
comparison so golden files survive checkouts with CRLF line endings. The
comparison is done on the UTF-8 bytes, so a golden file that is not valid
UTF-8 is reported as a mismatch.
"""

from dataclasses import dataclass

from guardio.filesystem.errors import GoldenMismatchError, NilRequestError
from guardio.filesystem.models import StrPath
from guardio.filesystem.operator import FileOperator
from guardio.utils.text import normalize_newlines_bytes

GOLDEN_DIR = "testdata"
GOLDEN_SUFFIX = ".golden"


@dataclass(frozen=True, slots=True)
class Testcase:
    """Name of a testcase and its reference or test data.

    Attributes:
        name: Testcase name; also the golden file's base name.
        data: Reference data when creating, test data when evaluating.
    """

    __test__ = False  # not a pytest test class

    name: str
    data: str


def golden_file_path(
    name: str,
    directory: StrPath = GOLDEN_DIR,
    operator: FileOperator | None = None,
) -> str:
    """Return the golden file path of a testcase.

    Raises:
        PathValidationError: If the directory or resulting path does not pass the gate.
    """
    op = operator or FileOperator()
    return op.join_path(directory, name + GOLDEN_SUFFIX)


def create_golden_file(
    testcase: Testcase | None,
    directory: StrPath = GOLDEN_DIR,
    operator: FileOperator | None = None,
) -> str:
    """Write the testcase data to its golden file.

    The golden directory is created if missing and an existing golden
    file is overwritten.

    Returns:
        Path of the written golden file.

    Raises:
        NilRequestError: If testcase is None.
        GuardError: If the directory or file cannot be written.
    """
    if testcase is None:
        raise NilRequestError("testcase")
    op = operator or FileOperator()
    op.create_dir(directory)
    path = golden_file_path(testcase.name, directory, op)
    op.write_single_str(path, testcase.data)
    return path


def eval_golden_file(
    testcase: Testcase | None,
    directory: StrPath = GOLDEN_DIR,
    operator: FileOperator | None = None,
) -> None:
    """Compare the testcase data with its golden file.

    Raises:
        NilRequestError: If testcase is None.
        NotExistentError: If the golden file does not exist.
        GoldenMismatchError: If the data differs from the golden file.
    """
    if testcase is None:
        raise NilRequestError("testcase")
    op = operator or FileOperator()
    path = golden_file_path(testcase.name, directory, op)
    raw = op.read_file(path)
    data = testcase.data.encode("utf-8", "surrogatepass")
    if normalize_newlines_bytes(data) != normalize_newlines_bytes(raw):
        want = raw.decode("utf-8", errors="replace")
        raise GoldenMismatchError(testcase.name, path, testcase.data, want)
