import io
import subprocess
import sys
import types
import unittest
from unittest.mock import patch

from app_config_schema import NotifySettings
from notify import (
    MESSAGE_END_OF_BREAK,
    MESSAGE_END_OF_WORK,
    CommandNotifier,
    ConsoleNotifier,
    DesktopNotifier,
    NotificationError,
    boundary_message,
    create_notifier,
)


class _RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class MessageTests(unittest.TestCase):
    def test_boundary_message_names_the_ended_phase(self) -> None:
        self.assertEqual("End of a work period. Time for a break!", boundary_message("work"))
        self.assertEqual("End of a break period. Time for work!", boundary_message("break"))

    def test_boundary_message_rejects_unknown_phase(self) -> None:
        with self.assertRaises(ValueError):
            boundary_message("lunch")


class ConsoleNotifierTests(unittest.TestCase):
    def test_writes_message_line(self) -> None:
        stream = io.StringIO()
        ConsoleNotifier(stream).notify(MESSAGE_END_OF_WORK)
        self.assertEqual(MESSAGE_END_OF_WORK + "\n", stream.getvalue())


class DesktopNotifierTests(unittest.TestCase):
    def test_uses_notify_send_on_linux(self) -> None:
        with patch("notify.notifiers.platform.system", return_value="Linux"), patch(
            "notify.notifiers.shutil.which", return_value="/usr/bin/notify-send"
        ), patch("notify.notifiers.subprocess.run") as run:
            DesktopNotifier().notify(MESSAGE_END_OF_WORK)

        command = run.call_args.args[0]
        self.assertEqual(["notify-send", "-a", "Pomodoro", MESSAGE_END_OF_WORK], command)

    def test_uses_osascript_on_macos(self) -> None:
        with patch("notify.notifiers.platform.system", return_value="Darwin"), patch(
            "notify.notifiers.subprocess.run"
        ) as run:
            DesktopNotifier().notify(MESSAGE_END_OF_BREAK)

        command = run.call_args.args[0]
        self.assertEqual("osascript", command[0])
        self.assertIn(f'"{MESSAGE_END_OF_BREAK}"', command[2])

    def test_falls_back_when_no_tool_is_available(self) -> None:
        fallback = _RecordingNotifier()
        with patch("notify.notifiers.platform.system", return_value="Linux"), patch(
            "notify.notifiers.shutil.which", return_value=None
        ), patch("notify.notifiers.subprocess.run") as run:
            DesktopNotifier(fallback=fallback).notify(MESSAGE_END_OF_WORK)

        run.assert_not_called()
        self.assertEqual([MESSAGE_END_OF_WORK], fallback.messages)

    def test_wraps_tool_failures(self) -> None:
        error = subprocess.CalledProcessError(1, ["notify-send"])
        with patch("notify.notifiers.platform.system", return_value="Linux"), patch(
            "notify.notifiers.shutil.which", return_value="/usr/bin/notify-send"
        ), patch("notify.notifiers.subprocess.run", side_effect=error):
            with self.assertRaises(NotificationError):
                DesktopNotifier().notify(MESSAGE_END_OF_WORK)


class CommandNotifierTests(unittest.TestCase):
    def test_appends_block_type_and_message(self) -> None:
        with patch("notify.notifiers.subprocess.run") as run:
            notifier = CommandNotifier("my-callback --loud")
            notifier.notify(MESSAGE_END_OF_WORK)
            notifier.notify(MESSAGE_END_OF_BREAK)

        self.assertEqual(
            ["my-callback", "--loud", "0", MESSAGE_END_OF_WORK],
            run.call_args_list[0].args[0],
        )
        self.assertEqual(
            ["my-callback", "--loud", "1", MESSAGE_END_OF_BREAK],
            run.call_args_list[1].args[0],
        )

    def test_rejects_unknown_message(self) -> None:
        with patch("notify.notifiers.subprocess.run") as run:
            with self.assertRaises(NotificationError):
                CommandNotifier("my-callback").notify("Lunch time")
        run.assert_not_called()

    def test_wraps_missing_executable(self) -> None:
        with patch("notify.notifiers.subprocess.run", side_effect=FileNotFoundError("nope")):
            with self.assertRaises(NotificationError):
                CommandNotifier("missing-callback").notify(MESSAGE_END_OF_WORK)

    def test_rejects_empty_command(self) -> None:
        with self.assertRaises(ValueError):
            CommandNotifier("   ")


class CreateNotifierTests(unittest.TestCase):
    def test_selects_notifier_by_name(self) -> None:
        self.assertIsInstance(create_notifier(NotifySettings(notifier="console")), ConsoleNotifier)
        self.assertIsInstance(create_notifier(NotifySettings(notifier="desktop")), DesktopNotifier)
        self.assertIsInstance(
            create_notifier(NotifySettings(notifier="command", command="echo")),
            CommandNotifier,
        )

    def test_command_notifier_requires_command(self) -> None:
        with self.assertRaises(ValueError):
            create_notifier(NotifySettings(notifier="command"))

    def test_chime_wraps_desktop_notifier(self) -> None:
        stub = types.ModuleType("sounddevice")
        stub.play = lambda *args, **kwargs: None  # type: ignore[attr-defined]
        with patch.dict(sys.modules, {"sounddevice": stub}):
            sys.modules.pop("notify.chime", None)
            notifier = create_notifier(NotifySettings(notifier="chime"))
            self.assertEqual("ChimeNotifier", type(notifier).__name__)
        sys.modules.pop("notify.chime", None)


if __name__ == "__main__":
    unittest.main()
