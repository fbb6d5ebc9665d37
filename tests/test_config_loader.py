from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import tomllib
import unittest

from core.config_loader import load_config_file, normalize_string_list, normalize_string_mapping


class LoadConfigFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_loads_toml_mapping(self) -> None:
        path = self.root / "config.toml"
        path.write_text(
            textwrap.dedent(
                """
                [workspace]
                members = ["crates/*"]
                """
            )
        )
        self.assertEqual(load_config_file(path), {"workspace": {"members": ["crates/*"]}})

    def test_missing_file_raises_os_error(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config_file(self.root / "missing.toml")

    def test_invalid_toml_raises_decode_error(self) -> None:
        path = self.root / "broken.toml"
        path.write_text("members = [\n")
        with self.assertRaises(tomllib.TOMLDecodeError):
            load_config_file(path)


class NormalizeTests(unittest.TestCase):
    def test_string_list_accepts_arrays(self) -> None:
        self.assertEqual(normalize_string_list(["a", "b/*"]), ["a", "b/*"])
        self.assertEqual(normalize_string_list(None), [])

    def test_string_list_rejects_scalars_and_mixed_entries(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            normalize_string_list("crates/*", field_name="workspace.members")
        self.assertIn("workspace.members", str(ctx.exception))
        with self.assertRaises(TypeError):
            normalize_string_list(["a", 1], field_name="workspace.exclude")

    def test_string_mapping(self) -> None:
        self.assertEqual(normalize_string_mapping({"build": "cargo build"}), {"build": "cargo build"})
        self.assertEqual(normalize_string_mapping(None), {})

    def test_string_mapping_rejects_non_string_values(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            normalize_string_mapping({"build": 1}, field_name="package.metadata.commands")
        self.assertIn("'build'", str(ctx.exception))
        with self.assertRaises(TypeError):
            normalize_string_mapping(["build"], field_name="package.metadata.commands")


if __name__ == "__main__":
    unittest.main()
