import unittest
import unittest.mock

import click.testing

import smfctl
import smfctl.cli
import smfctl.core
import smfctl.core.execution
import smfctl.core.smf
import smfctl.core.smf.directory
import smfctl.core.smf.testing

_SSH = "svc:/network/ssh:default"
_CRON = "svc:/system/cron:default"


class TestCli(unittest.TestCase):
    def setUp(self):
        self.executor = smfctl.core.smf.testing.FakeExecutor(
            [
                smfctl.core.smf.testing.FakeService(
                    _SSH,
                    properties=[
                        ("general/enabled", "boolean", "true"),
                        ("start/exec", "astring", "/lib/svc/method/sshd start"),
                    ],
                ),
                smfctl.core.smf.testing.FakeService(_CRON, "maintenance", "Oct_17"),
            ]
        )
        self.directory = smfctl.core.smf.directory.Directory(self.executor)
        self.runner = click.testing.CliRunner()

    def _invoke(self, *arguments):
        return self.runner.invoke(
            smfctl.cli.main,
            list(arguments),
            obj=self.directory,
        )

    def test_list(self):
        result = self._invoke("list")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(_SSH, result.output)
        self.assertIn(_CRON, result.output)
        self.assertIn("maintenance", result.output)

    def test_list_pattern(self):
        result = self._invoke("list", "ssh")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(_SSH, result.output)
        self.assertNotIn(_CRON, result.output)

    def test_status(self):
        result = self._invoke("status", _CRON)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "maintenance Oct_17")

    def test_status_unknown_service(self):
        result = self._invoke("status", "svc:/network/missing:default")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("svc:/network/missing:default", result.output)

    def test_properties(self):
        result = self._invoke("properties", _SSH)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("general/enabled", result.output)
        self.assertIn("/lib/svc/method/sshd start", result.output)

    def test_properties_group(self):
        result = self._invoke("properties", "--group", "start", _SSH)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("start/exec", result.output)
        self.assertNotIn("general/enabled", result.output)

    def test_properties_bracketed_value(self):
        self.executor.services[_SSH].set_property(
            "start/exec",
            "astring",
            "[/etc/init.d/x] [bold]start",
        )

        result = self._invoke("properties", "--group", "start", _SSH)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("[/etc/init.d/x] [bold]start", result.output)

    def test_list_unknown_state(self):
        self.executor.services[_CRON].state = "ON"

        result = self._invoke("list")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(_CRON, result.output)

    def test_property(self):
        result = self._invoke("property", _SSH, "general/enabled")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "true")

    def test_property_type(self):
        result = self._invoke("property-type", _SSH, "general/enabled")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "boolean")

    def test_missing_property(self):
        result = self._invoke("property", _SSH, "general/missing")

        self.assertEqual(result.exit_code, 1)

    def test_disable(self):
        result = self._invoke("disable", _SSH)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.executor.calls[-1], ("svcadm", "disable", _SSH))
        self.assertIn("disabled", self._invoke("status", _SSH).output)

    def test_disable_temporary(self):
        self._invoke("disable", "-t", _SSH)

        self.assertEqual(self.executor.calls[-1], ("svcadm", "disable", "-t", _SSH))

    def test_enable_temporary(self):
        self._invoke("enable", "--temporary", _SSH)

        self.assertEqual(self.executor.calls[-1], ("svcadm", "enable", "-t", _SSH))

    def test_actions(self):
        for (command, arguments) in [
            ("enable", ("enable",)),
            ("start", ("enable", "-t")),
            ("stop", ("disable", "-t")),
            ("refresh", ("refresh",)),
            ("restart", ("restart",)),
            ("clear", ("clear",)),
        ]:
            with self.subTest(command=command):
                result = self._invoke(command, _CRON)

                self.assertEqual(result.exit_code, 0, result.output)
                self.assertEqual(
                    self.executor.calls[-1],
                    ("svcadm", *arguments, _CRON),
                )

    def test_mark(self):
        self._invoke("mark", "--degraded", "-I", _SSH)

        self.assertEqual(
            self.executor.calls[-1],
            ("svcadm", "mark", "-I", "degraded", _SSH),
        )

    def test_execution_error(self):
        with unittest.mock.patch.object(
            self.executor,
            "execute",
            side_effect=smfctl.core.execution.CommandNotFoundError(
                "svcadm",
                ("/usr/sbin",),
            ),
        ):
            result = self._invoke("enable", _SSH)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("svcadm", result.output)

    def test_invalid_configuration(self):
        with self.runner.isolated_filesystem():
            with open("smfctl.yaml", "w", encoding="utf-8") as handle:
                handle.write("search_path: [bin]\n")

            result = self.runner.invoke(
                smfctl.cli.main,
                ["--configuration", "smfctl.yaml", "list"],
            )

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid configuration", result.output)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
