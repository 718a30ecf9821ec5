from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from pyforge.config import CONFIG_ENV_VAR, ForgeConfig, load_config, resolve_config_path
from pyforge.exceptions import (
    FileError,
    InvalidConfigError,
    InvalidJsonError,
    InvalidTomlError,
    ParseError,
    TemplateNotFoundError,
    UnsupportedPythonVersionError,
    iter_causes,
)


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, text: str) -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_toml(self) -> None:
        path = self._write(
            "pyforge.toml",
            'python_version = "3.11"\ntemplate = "cli"\nverbose = true\n',
        )
        self.assertEqual(
            load_config(path),
            ForgeConfig(python_version="3.11", template="cli", verbose=True),
        )

    def test_json(self) -> None:
        path = self._write("pyforge.json", '{"template": "library"}')
        self.assertEqual(load_config(path), ForgeConfig(template="library"))

    def test_yaml(self) -> None:
        path = self._write("pyforge.yml", "python_version: '3.12.1'\n")
        self.assertEqual(load_config(path).python_version, "3.12.1")

    def test_empty_yaml_means_defaults(self) -> None:
        path = self._write("pyforge.yaml", "")
        self.assertEqual(load_config(path), ForgeConfig())

    def test_falsy_yaml_document_is_not_a_mapping(self) -> None:
        for text, kind in (("[]\n", "list"), ("false\n", "bool"), ("0\n", "int")):
            with self.subTest(text=text):
                path = self._write("pyforge.yaml", text)
                with self.assertRaises(InvalidConfigError) as cm:
                    load_config(path)
                self.assertIn(kind, str(cm.exception.__cause__))

    def test_invalid_utf8(self) -> None:
        path = self.root / "pyforge.toml"
        path.write_bytes(b'template = "\xff"\n')
        with self.assertRaises(InvalidConfigError) as cm:
            load_config(path)
        self.assertEqual(cm.exception.file, str(path))
        self.assertEqual(cm.exception.exit_code, 1)
        self.assertIsInstance(cm.exception.__cause__, UnicodeDecodeError)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileError) as cm:
            load_config(self.root / "absent.toml")
        self.assertEqual(cm.exception.exit_code, 2)
        self.assertIsInstance(cm.exception.__cause__, FileNotFoundError)

    def test_toml_syntax_error(self) -> None:
        path = self._write("pyforge.toml", "template = \n")
        with self.assertRaises(InvalidTomlError) as cm:
            load_config(path)
        self.assertEqual(cm.exception.file, str(path))

    def test_json_syntax_error(self) -> None:
        path = self._write("pyforge.json", "{")
        with self.assertRaises(InvalidJsonError) as cm:
            load_config(path)
        self.assertEqual(cm.exception.file, str(path))

    def test_yaml_syntax_error(self) -> None:
        path = self._write("pyforge.yaml", "template: [cli\n")
        with self.assertRaises(ParseError) as cm:
            load_config(path)
        self.assertEqual(cm.exception.file_type, "YAML")

    def test_unsupported_extension(self) -> None:
        path = self._write("pyforge.ini", "[pyforge]\n")
        with self.assertRaises(InvalidConfigError) as cm:
            load_config(path)
        self.assertIn(".ini", str(cm.exception.__cause__))

    def test_document_must_be_a_mapping(self) -> None:
        path = self._write("pyforge.json", "[1, 2]")
        with self.assertRaises(InvalidConfigError) as cm:
            load_config(path)
        self.assertIn("list", str(cm.exception.__cause__))

    def test_unknown_key(self) -> None:
        path = self._write("pyforge.toml", 'author = "me"\n')
        with self.assertRaises(InvalidConfigError) as cm:
            load_config(path)
        causes = list(iter_causes(cm.exception))
        self.assertEqual(len(causes), 1)
        self.assertIsInstance(causes[0], ValueError)
        self.assertIn("author", str(causes[0]))

    def test_wrong_type(self) -> None:
        path = self._write("pyforge.json", '{"verbose": "yes"}')
        with self.assertRaises(InvalidConfigError) as cm:
            load_config(path)
        self.assertIn("'verbose' must be bool", str(cm.exception.__cause__))

    def test_unsupported_python_version(self) -> None:
        path = self._write("pyforge.toml", 'python_version = "2.7"\n')
        with self.assertRaises(UnsupportedPythonVersionError) as cm:
            load_config(path)
        self.assertEqual(cm.exception.version, "2.7")

    def test_unknown_template(self) -> None:
        path = self._write("pyforge.toml", 'template = "django"\n')
        with self.assertRaises(TemplateNotFoundError):
            load_config(path)


class ResolveConfigPathTests(unittest.TestCase):
    def setUp(self) -> None:
        self._saved = os.environ.pop(CONFIG_ENV_VAR, None)

    def tearDown(self) -> None:
        os.environ.pop(CONFIG_ENV_VAR, None)
        if self._saved is not None:
            os.environ[CONFIG_ENV_VAR] = self._saved

    def test_nothing_configured(self) -> None:
        self.assertIsNone(resolve_config_path(None))

    def test_env_var(self) -> None:
        os.environ[CONFIG_ENV_VAR] = "conf/pyforge.toml"
        self.assertEqual(resolve_config_path(None), Path("conf/pyforge.toml"))

    def test_flag_wins_over_env(self) -> None:
        os.environ[CONFIG_ENV_VAR] = "conf/pyforge.toml"
        self.assertEqual(resolve_config_path("mine.json"), Path("mine.json"))


if __name__ == "__main__":
    unittest.main()
