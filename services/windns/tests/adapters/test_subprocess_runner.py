import shlex
import sys
from pathlib import Path

import pytest

from windns.adapters.errors import LaunchError
from windns.adapters.process.subprocess_runner import SubprocessRunner

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="argument strings are split POSIX-style"
)

PYTHON = Path(sys.executable)


def _script(code: str) -> str:
    return f"-c {shlex.quote(code)}"


def test_join_returns_exit_code():
    runner = SubprocessRunner()
    with runner.start(PYTHON, _script("import sys; sys.exit(3)")) as handle:
        assert handle.join(10000) == (3, True)


def test_read_output_merges_stderr():
    code = "import sys; sys.stderr.write('line1\\r\\nline2\\r\\n'); sys.exit(1)"
    with SubprocessRunner(encoding="utf-8").start(PYTHON, _script(code)) as handle:
        assert handle.join(10000) == (1, True)
        text, ok = handle.read_output(2048, 2000)
    assert ok
    assert text == "line1\r\nline2\r\n"


def test_read_output_reports_empty_stream():
    with SubprocessRunner().start(PYTHON, _script("pass")) as handle:
        assert handle.join(10000) == (0, True)
        assert handle.read_output(2048, 2000) == ("", False)


def test_join_times_out_without_killing():
    with SubprocessRunner().start(PYTHON, _script("import time; time.sleep(30)")) as handle:
        try:
            assert handle.join(100) == (None, False)
            assert handle.read_output(2048, 100) == ("", False)
            assert handle.join(0) == (None, False)
        finally:
            handle.terminate()
        assert handle.join(10000)[1]


def test_missing_executable_raises_launch_error(tmp_path):
    with pytest.raises(LaunchError) as excinfo:
        SubprocessRunner().start(tmp_path / "netsh.exe", "interface ipv4 show dnsservers")
    assert isinstance(excinfo.value.cause, FileNotFoundError)


def test_unknown_encoding_is_rejected_up_front():
    with pytest.raises(LookupError):
        SubprocessRunner(encoding="no-such-codec")


def test_encoding_name_is_normalized():
    assert SubprocessRunner(encoding="UTF8").encoding == "utf-8"
