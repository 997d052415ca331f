import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

import main

NOW = 1_700_000_000


class MainCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.root = Path(temp_dir.name)
        self.record_path = self.root / "data" / "pomo"
        environ = {
            "XDG_CONFIG_HOME": str(self.root / "config"),
            "POMO_FILE": str(self.record_path),
        }
        patcher = patch.dict(os.environ, environ, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str, now: int = NOW) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with patch("pomodoro.service.time.time", return_value=float(now)):
            with redirect_stdout(stdout), redirect_stderr(stderr):
                code = main.main(list(argv))
        return code, stdout.getvalue(), stderr.getvalue()

    def test_clock_when_stopped(self) -> None:
        code, out, _ = self._run("clock")
        self.assertEqual(0, code)
        self.assertEqual("  --:--\n", out)

    def test_start_pause_clock_stop_sequence(self) -> None:
        self.assertEqual(0, self._run("start")[0])
        self.assertEqual(" W24:08\n", self._run("clock", now=NOW + 52)[1])

        self.assertEqual(0, self._run("pause", now=NOW + 52)[0])
        self.assertEqual("PW24:08\n", self._run("clock", now=NOW + 500)[1])

        self.assertEqual(0, self._run("pause", now=NOW + 500)[0])
        self.assertEqual(" B03:55\n", self._run("clock", now=NOW + 500 + 1513)[1])

        self.assertEqual(0, self._run("stop")[0])
        self.assertFalse(self.record_path.exists())

    def test_missing_action_prints_usage(self) -> None:
        code, _, err = self._run()
        self.assertEqual(2, code)
        self.assertIn("Action not supplied.", err)
        self.assertIn("usage:", err)

    def test_unknown_action_prints_usage(self) -> None:
        code, _, err = self._run("snooze")
        self.assertEqual(2, code)
        self.assertIn("Unknown action: snooze.", err)

    def test_usage_action_prints_help(self) -> None:
        code, out, _ = self._run("usage")
        self.assertEqual(0, code)
        self.assertIn("POMO_WORK_TIME", out)

    def test_configuration_error_exits_non_zero(self) -> None:
        with patch.dict(os.environ, {"POMO_WORK_TIME": "0"}):
            code, _, err = self._run("start")
        self.assertEqual(1, code)
        self.assertFalse(self.record_path.exists())

    def test_storage_error_exits_non_zero(self) -> None:
        self.record_path.parent.write_text("", encoding="utf-8")

        code, _, _ = self._run("start")
        self.assertEqual(1, code)


if __name__ == "__main__":
    unittest.main()
