import importlib
import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock, patch
from click.testing import CliRunner
from ffbuilder.main import cli
from ffbuilder.policy import Platform
from ffbuilder.probe import ProbeResult
from ffbuilder.resolver import resolve

resolve_module = importlib.import_module("ffbuilder.commands.resolve")
configure_module = importlib.import_module("ffbuilder.commands.configure")
doctor_module = importlib.import_module("ffbuilder.commands.doctor")
log_module = importlib.import_module("ffbuilder.commands.log")
version_module = importlib.import_module("ffbuilder.commands.version")

CLEAN_ENV = {"ENABLE_CODECS": None, "ARCH": None, "BUILD_TYPE": None, "PREFIX": None}


def fake_resolve(available):
    def _resolve(request):
        return resolve(request, prober=lambda spec, env: ProbeResult(spec, spec.name in available, "stub"), env={})
    return _resolve


class CommandTestCase(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def invoke(self, *args, env=None):
        return self.runner.invoke(cli, ["--path", self.test_dir, *args], env=env or CLEAN_ENV)


class TestResolveCommand(CommandTestCase):

    @patch('ffbuilder.resolver.logger')
    @patch.object(resolve_module, "logger")
    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve({"libx264", "libopus"}))
    def test_resolve_json(self, mock_resolve, mock_logger, mock_resolver_logger):
        result = self.invoke("resolve", "--platform", "linux", "--arch", "x86_64",
                             "-c", "libx264,libopus,libfoo", "--json")
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["included"], ["libx264", "libopus"])
        self.assertEqual(data["unknown_requested"], ["libfoo"])
        self.assertEqual(data["enabled_flags"][-1], "--enable-optimizations")
        self.assertFalse(data["needs_fallback"])

    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve({"libx264"}))
    def test_resolve_text_report(self, mock_resolve):
        result = self.invoke("resolve", "--platform", "windows", "--arch", "x86_64", "-c", "libx264,libopus")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Included: libx264", result.output)
        self.assertIn("Skipped (not found): libopus", result.output)
        self.assertIn("  --cross-prefix=x86_64-w64-mingw32-", result.output)

    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve(set()))
    def test_resolve_reads_codecs_from_environment(self, mock_resolve):
        env = dict(CLEAN_ENV, ENABLE_CODECS="libvpx")
        result = self.invoke("resolve", "--platform", "linux", "--arch", "x86_64", env=env)
        self.assertEqual(result.exit_code, 0, result.output)
        request = mock_resolve.call_args[0][0]
        self.assertEqual(request.requested_features, frozenset({"libvpx"}))

    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve(set()))
    def test_resolve_uses_config_file(self, mock_resolve):
        with open(os.path.join(self.test_dir, "ffbuilder.toml"), "w") as f:
            f.write('[build]\nprofile = "debug"\nprefix = "/opt/ff"\nfeatures = ["libaom"]\n')
        result = self.invoke("resolve", "--platform", "linux", "--arch", "aarch64")
        self.assertEqual(result.exit_code, 0, result.output)
        request = mock_resolve.call_args[0][0]
        self.assertEqual(request.install_prefix, "/opt/ff")
        self.assertEqual(request.requested_features, frozenset({"libaom"}))
        self.assertEqual(request.build_profile.value, "debug")

    @patch.object(resolve_module, "resolve_features")
    def test_unsupported_architecture_exits_non_zero(self, mock_resolve):
        mock_resolve.side_effect = fake_resolve(set())
        result = self.invoke("resolve", "--platform", "darwin", "--arch", "i686")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unsupported architecture 'i686' for platform 'darwin'", result.output)

    @patch('ffbuilder.policy.detect_host', return_value=(Platform.LINUX, "x86_64"))
    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve(set()))
    def test_resolve_defaults_to_host(self, mock_resolve, mock_detect):
        result = self.invoke("resolve")
        self.assertEqual(result.exit_code, 0, result.output)
        request = mock_resolve.call_args[0][0]
        self.assertIs(request.platform, Platform.LINUX)
        self.assertEqual(request.architecture, "x86_64")
        self.assertEqual(request.requested_features, frozenset())

    @patch('ffbuilder.policy.host_platform.system', return_value="FreeBSD")
    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve({"libx264"}))
    def test_explicit_target_skips_host_detection(self, mock_resolve, mock_system):
        result = self.invoke("resolve", "--platform", "linux", "--arch", "x86_64", "-c", "libx264")
        self.assertEqual(result.exit_code, 0, result.output)
        mock_system.assert_not_called()
        request = mock_resolve.call_args[0][0]
        self.assertIs(request.platform, Platform.LINUX)
        self.assertEqual(request.architecture, "x86_64")

    @patch.object(resolve_module, "resolve_features", side_effect=fake_resolve(set()))
    def test_short_path_option(self, mock_resolve):
        with open(os.path.join(self.test_dir, "ffbuilder.toml"), "w") as f:
            f.write('[build]\nprefix = "/opt/short"\n')
        result = self.runner.invoke(cli, ["-p", self.test_dir, "resolve", "--platform", "linux", "--arch", "x86_64"],
                                    env=CLEAN_ENV)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(mock_resolve.call_args[0][0].install_prefix, "/opt/short")


class TestConfigureCommand(CommandTestCase):

    def test_configure_primary_writes_build_info(self):
        step = MagicMock(return_value=True)
        info_dir = os.path.join(self.test_dir, "dist")
        with patch.object(configure_module, "make_configure_step", return_value=step), \
                patch.object(configure_module, "resolve_features", side_effect=fake_resolve({"libx264"})):
            result = self.invoke("configure", "--platform", "linux", "--arch", "x86_64",
                                 "-c", "libx264", "--build-info", info_dir)
        self.assertEqual(result.exit_code, 0, result.output)
        step.assert_called_once()
        with open(os.path.join(info_dir, "build-info.txt")) as f:
            info = f.read()
        self.assertIn("Version: 6.1", info)
        self.assertIn("Codecs: libx264", info)
        self.assertIn("Configuration: primary", info)

    def test_configure_minimal_failure_exits_non_zero(self):
        step = MagicMock(return_value=False)
        with patch.object(configure_module, "make_configure_step", return_value=step), \
                patch.object(configure_module, "resolve_features", side_effect=fake_resolve(set())):
            result = self.invoke("configure", "--platform", "linux", "--arch", "x86_64", "-c", "libfoo")
        self.assertEqual(result.exit_code, 1)
        step.assert_called_once()
        self.assertIn("Even the minimal configuration was rejected", result.output)

    def test_configure_outside_source_tree(self):
        result = self.invoke("configure", "--platform", "linux", "--arch", "x86_64",
                             "--source-dir", self.test_dir)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Not in FFmpeg source directory", result.output)


class TestInfoCommands(CommandTestCase):

    def test_features_lists_catalog(self):
        result = self.invoke("features")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("libx264", result.output)
        self.assertIn("libaom", result.output)

    def test_features_defaults_only(self):
        result = self.invoke("features", "--defaults")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("libx264", result.output)
        self.assertNotIn("libaom", result.output)

    @patch.object(doctor_module, "probe_tools_status", return_value={"pkg-config": None, "gcc": "/usr/bin/gcc"})
    def test_doctor_reports_missing_tool(self, mock_status):
        result = self.invoke("doctor")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("pkg-config not found", result.output)

    def test_log_lists_files(self):
        with patch.object(log_module, "LOG_DIR", self.test_dir):
            with open(os.path.join(self.test_dir, "ffbuilder_20240501_120000.log"), "w") as f:
                f.write("[12:00:00] [WARNING] libopus not found, skipping\n")
            result = self.invoke("log", "--list")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("ffbuilder_20240501_120000.log", result.output)

    def test_log_displays_file(self):
        with patch.object(log_module, "LOG_DIR", self.test_dir):
            with open(os.path.join(self.test_dir, "ffbuilder_20240501_120000.log"), "w") as f:
                f.write("[12:00:00] [WARNING] libopus not found, skipping\n")
            result = self.invoke("log", "--filename", "ffbuilder_20240501_120000.log")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("libopus not found, skipping", result.output)

    @patch.object(version_module.importlib.metadata, "version", return_value="0.1.0")
    def test_version(self, mock_version):
        with patch.object(version_module, "logger") as mock_logger:
            result = self.invoke("version")
        self.assertEqual(result.exit_code, 0)
        mock_logger.info.assert_called_once_with("ffbuilder version 0.1.0")

if __name__ == '__main__':
    unittest.main()
