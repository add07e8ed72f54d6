# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Unit Tests for CLI Configuration Loading

Tests YAML/JSON configuration file loading, merging, and two-phase parsing.
"""

import unittest
import tempfile
import json
import sys
from pathlib import Path

from fakes.fake_logger import FakeLogger
from ovf2vmware.cli.args.parser import build_parser, parse_args_with_config
from ovf2vmware.config.config_loader import Config
from ovf2vmware.core.exceptions import Fatal


class _ConfigTestCase(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.td = Path(self._td.name)
        self.ovf = self.td / "centos7.ovf"
        self.ovf.write_text("<Envelope/>\n", encoding="utf-8")
        self.logger = FakeLogger()

    def tearDown(self):
        self._td.cleanup()

    def parse(self, *argv):
        return parse_args_with_config(argv=list(argv), logger=self.logger)


class TestCLIConfigTwoPhaseParse(_ConfigTestCase):
    """Test two-phase config parsing (config files + CLI args)"""

    def test_defaults(self):
        args, conf, logger = self.parse("-f", str(self.ovf))

        self.assertEqual(conf, {})
        self.assertIs(logger, self.logger)
        self.assertEqual(args.input, str(self.ovf))
        self.assertIsNone(args.output)
        self.assertEqual(args.system_type, "vmx-10")
        self.assertTrue(args.remove_ide)
        self.assertEqual(args.ide_limit, -1)
        self.assertTrue(args.convert_sata)
        self.assertTrue(args.fix_cdrom)
        self.assertTrue(args.validate_output)
        self.assertFalse(args.force)
        self.assertFalse(args.dry_run)

    def test_config_satisfies_input(self):
        cfg = self.td / "cfg.yaml"
        cfg.write_text(f"input: {self.ovf}\n", encoding="utf-8")

        args, conf, _logger = self.parse("--config", str(cfg))

        self.assertEqual(Path(args.input), self.ovf)
        self.assertIn("input", conf)

    def test_cli_args_override_config(self):
        cfg = self.td / "cfg.yaml"
        cfg.write_text(
            f"""
input: {self.ovf}
system-type: vmx-13
remove_ide: false
ide_limit: 1
""",
            encoding="utf-8",
        )

        args, conf, _logger = self.parse("--config", str(cfg), "--system-type", "vmx-11")

        self.assertEqual(args.system_type, "vmx-11")
        self.assertFalse(args.remove_ide)
        self.assertEqual(args.ide_limit, 1)
        self.assertEqual(conf["system_type"], "vmx-13")

    def test_multiple_config_files_merge(self):
        base = self.td / "base.yaml"
        base.write_text(f"input: {self.ovf}\nfix_cdrom: false\nsystem_type: vmx-9\n", encoding="utf-8")
        override = self.td / "override.json"
        override.write_text(json.dumps({"system_type": "vmx-14"}), encoding="utf-8")

        args, conf, _logger = self.parse("--config", str(base), "--config", str(override))

        self.assertEqual(args.system_type, "vmx-14")
        self.assertFalse(args.fix_cdrom)

    def test_config_directory(self):
        d = self.td / "conf.d"
        d.mkdir()
        (d / "10-input.yaml").write_text(f"input: {self.ovf}\n", encoding="utf-8")
        (d / "20-policy.yml").write_text("convert_sata: false\n", encoding="utf-8")
        (d / "README").write_text("ignored\n", encoding="utf-8")

        args, _conf, _logger = self.parse("--config", str(d))

        self.assertFalse(args.convert_sata)

    def test_unknown_keys_are_ignored(self):
        cfg = self.td / "cfg.yaml"
        cfg.write_text(f"input: {self.ovf}\nflatten: true\n", encoding="utf-8")

        args, conf, _logger = self.parse("--config", str(cfg))

        self.assertFalse(hasattr(args, "flatten"))
        self.assertTrue(any("flatten" in m for m in self.logger.messages("debug")))

    def test_empty_system_type_is_allowed(self):
        args, _conf, _logger = self.parse("-f", str(self.ovf), "--system-type", " ")
        self.assertEqual(args.system_type, "")


class TestCLIValidation(_ConfigTestCase):
    def assertFatal(self, *argv):
        with self.assertRaises(Fatal) as cm:
            self.parse(*argv)
        self.assertEqual(cm.exception.code, 2)
        self.assertTrue(self.logger.messages("error"))
        return cm.exception

    def test_missing_input(self):
        err = self.assertFatal()
        self.assertIn("-f/--input", str(err))

    def test_input_not_found(self):
        self.assertFatal("-f", str(self.td / "missing.ovf"))

    def test_output_same_as_input(self):
        self.assertFatal("-f", str(self.ovf), "-o", str(self.td / "." / "centos7.ovf"))

    def test_bad_config_values(self):
        cfg = self.td / "cfg.yaml"
        for body in ("ide_limit: lots\n", "remove_ide: maybe\n", "system_type: [1, 2]\n"):
            cfg.write_text(f"input: {self.ovf}\n{body}", encoding="utf-8")
            self.assertFatal("--config", str(cfg))

    def test_ide_limit_must_be_int_on_cli(self):
        with self.assertRaises(SystemExit) as cm:
            self.parse("-f", str(self.ovf), "--ide-limit", "x")
        self.assertEqual(cm.exception.code, 2)


class TestConfigLoader(_ConfigTestCase):
    def test_missing_file(self):
        with self.assertRaises(Fatal):
            Config.load(self.logger, self.td / "nope.yaml")

    def test_invalid_yaml(self):
        cfg = self.td / "bad.yaml"
        cfg.write_text("input: [unclosed\n", encoding="utf-8")
        with self.assertRaises(Fatal):
            Config.load(self.logger, cfg)

    def test_invalid_json(self):
        cfg = self.td / "bad.json"
        cfg.write_text("{", encoding="utf-8")
        with self.assertRaises(Fatal):
            Config.load(self.logger, cfg)

    def test_top_level_must_be_mapping(self):
        cfg = self.td / "list.yaml"
        cfg.write_text("- a\n- b\n", encoding="utf-8")
        with self.assertRaises(Fatal):
            Config.load(self.logger, cfg)

    def test_empty_file(self):
        cfg = self.td / "empty.yaml"
        cfg.write_text("", encoding="utf-8")
        self.assertEqual(Config.load(self.logger, cfg), {})

    def test_keys_are_normalized_and_merged_deeply(self):
        a = self.td / "a.yaml"
        a.write_text("dry-run: true\nextra:\n  one: 1\n  two: 2\n", encoding="utf-8")
        b = self.td / "b.yaml"
        b.write_text("extra:\n  two: 3\n", encoding="utf-8")

        merged = Config.load_many(self.logger, [a, b])

        self.assertEqual(merged, {"dry_run": True, "extra": {"one": 1, "two": 3}})

    def test_apply_as_defaults(self):
        parser = build_parser()
        Config.apply_as_defaults(self.logger, parser, {"force": True, "nonsense": 1})

        args = parser.parse_args([])

        self.assertTrue(args.force)
        self.assertFalse(hasattr(args, "nonsense"))


class TestDumpFlags(_ConfigTestCase):
    def _capture(self, *argv):
        import io
        from contextlib import redirect_stdout

        buf = io.StringIO()
        with redirect_stdout(buf), self.assertRaises(SystemExit) as cm:
            self.parse(*argv)
        self.assertEqual(cm.exception.code, 0)
        return json.loads(buf.getvalue())

    def test_dump_config(self):
        cfg = self.td / "cfg.yaml"
        cfg.write_text("fix-cdrom: false\n", encoding="utf-8")

        self.assertEqual(self._capture("--config", str(cfg), "--dump-config"), {"fix_cdrom": False})

    def test_dump_args(self):
        dumped = self._capture("-f", str(self.ovf), "--dump-args", "--keep-ide")

        self.assertFalse(dumped["remove_ide"])
        self.assertEqual(dumped["input"], str(self.ovf))


if __name__ == "__main__":
    unittest.main(argv=sys.argv[:1])
