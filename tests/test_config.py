import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from viewsvn.config import default_config_dir, find_config_path, load_config


class ConfigTests(unittest.TestCase):
    def test_missing_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config"
            config = load_config(config_path)

            self.assertFalse(config_path.exists())
        self.assertEqual(config.viewer, "TortoiseProc.exe")
        self.assertEqual(config.log_level, "INFO")
        self.assertEqual(config.registry_root, "classes_root")
        self.assertEqual(config.launch_timeout_seconds, 0)
        self.assertEqual(config.log_file.name, "viewsvn.log")

    def test_values_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config"
            log_file = Path(temp_dir) / "logs" / "viewsvn.log"
            config_path.write_text(
                "[viewsvn]\n"
                "viewer = C:/Program Files/TortoiseSVN/bin/TortoiseProc.exe  # full path\n"
                "log_level = debug\n"
                f"log_file = {log_file}\n"
                "registry_root = current_user\n"
                "launch_timeout_seconds = 30\n",
                encoding="utf-8",
            )
            config = load_config(config_path)

        self.assertEqual(config.viewer, "C:/Program Files/TortoiseSVN/bin/TortoiseProc.exe")
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.log_file, log_file)
        self.assertEqual(config.registry_root, "current_user")
        self.assertEqual(config.launch_timeout_seconds, 30)
        self.assertEqual(config.config_path, config_path)

    def test_invalid_values_fall_back_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config"
            config_path.write_text(
                "[viewsvn]\n"
                "viewer =\n"
                "log_level = chatty\n"
                "registry_root = local_machine\n"
                "launch_timeout_seconds = -1\n",
                encoding="utf-8",
            )
            with self.assertLogs("viewsvn.config", level="WARNING") as captured:
                config = load_config(config_path)

        self.assertEqual(config.viewer, "TortoiseProc.exe")
        self.assertEqual(config.log_level, "INFO")
        self.assertEqual(config.registry_root, "classes_root")
        self.assertEqual(config.launch_timeout_seconds, 0)
        self.assertEqual(len(captured.output), 4)

    def test_percent_signs_are_read_literally(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config"
            config_path.write_text(
                "[viewsvn]\n"
                "viewer = %ProgramFiles%\\TortoiseSVN\\bin\\TortoiseProc.exe\n"
                "log_level = debug\n",
                encoding="utf-8",
            )
            config = load_config(config_path)

        self.assertEqual(config.viewer, "%ProgramFiles%\\TortoiseSVN\\bin\\TortoiseProc.exe")
        self.assertEqual(config.log_level, "DEBUG")

    def test_unparseable_file_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config"
            config_path.write_text("viewer = x\n", encoding="utf-8")
            with self.assertLogs("viewsvn.config", level="WARNING") as captured:
                config = load_config(config_path)

        self.assertEqual(config.viewer, "TortoiseProc.exe")
        self.assertEqual(config.registry_root, "classes_root")
        self.assertIn("could not be parsed", captured.output[0])

    def test_env_override(self) -> None:
        with mock.patch.dict(os.environ, {"VIEWSVN_CONFIG": "~/custom-viewsvn.ini"}):
            self.assertEqual(find_config_path(), Path("~/custom-viewsvn.ini").expanduser())

    def test_default_config_dir_follows_xdg(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with mock.patch("viewsvn.config.platform.system", return_value="Linux"):
                with mock.patch.dict(os.environ, {"XDG_CONFIG_HOME": temp_dir}):
                    self.assertEqual(default_config_dir(), Path(temp_dir) / "viewsvn")

    def test_default_config_dir_on_windows_uses_appdata(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with mock.patch("viewsvn.config.platform.system", return_value="Windows"):
                with mock.patch.dict(os.environ, {"APPDATA": temp_dir}):
                    self.assertEqual(default_config_dir(), Path(temp_dir) / "viewsvn")


if __name__ == "__main__":
    unittest.main()
