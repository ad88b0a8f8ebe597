"""CLI tests: commands wired end to end over a scripted runner."""

from unittest import mock

import pytest
from click.testing import CliRunner

from tests.helpers import (
    CATALOG_LISTING,
    DISM_ENABLED,
    INSTANCE_LISTING,
    TRANSIENT,
    FakeRunner,
    fail,
    ok,
)
from wslbootstrap.main import cli
from wslbootstrap.models import Credential


@pytest.fixture
def fake():
    runner = FakeRunner()
    with mock.patch("wslbootstrap.base.base_command.CommandRunner", return_value=runner):
        yield runner


@pytest.fixture
def cli_runner():
    return CliRunner()


def invoke(cli_runner, args, tmp_path, **kwargs):
    return cli_runner.invoke(cli, args + ["--log-dir", str(tmp_path)], **kwargs)


class TestProvision:
    def test_interactive_defaults(self, fake, cli_runner, tmp_path):
        fake.on("/get-featureinfo", ok(DISM_ENABLED))
        fake.on("--list --verbose", ok(INSTANCE_LISTING))
        fake.on("--list --online", ok(CATALOG_LISTING))
        fake.on("--set-default", fail(stdout=TRANSIENT), ok())
        fake.on("-- id -u", fail())
        fake.on("ansible --version", ok("ansible [core 2.16.3]\n"))

        with mock.patch(
            "wslbootstrap.commands.provision.Prompt.ask", side_effect=["", "", "hunter2"]
        ), mock.patch(
            "wslbootstrap.commands.provision.inquirer.prompt",
            return_value={"distribution": "Ubuntu-24.04"},
        ):
            result = invoke(cli_runner, ["provision", "--retry-delay", "0"], tmp_path)

        assert result.exit_code == 0, result.output
        assert "is ready" in result.output
        assert "hunter2" not in result.output
        assert fake.commands("--install -d") == [
            "wsl --install -d Ubuntu-24.04 --name ansible-control --no-launch"
        ]
        assert fake.commands("--set-default") == ["wsl --set-default ansible-control"] * 2
        assert fake.commands("useradd") == [
            "wsl -d ansible-control -u root -- useradd -m -s /bin/bash ansible"
        ]
        logs = list(tmp_path.glob("logs/ansible-control/*/*_provision.log"))
        assert len(logs) == 1
        assert "hunter2" not in logs[0].read_text()

    def test_exhausted_retries_exit_1(self, fake, cli_runner, tmp_path):
        fake.on("/get-featureinfo", ok(DISM_ENABLED))
        fake.on("--list --verbose", ok(INSTANCE_LISTING))
        fake.on("--set-default", fail(stdout=TRANSIENT))

        with mock.patch(
            "wslbootstrap.commands.provision.Prompt.ask", side_effect=["pw"]
        ):
            result = invoke(
                cli_runner,
                ["provision", "-n", "control-node", "-u", "ansible",
                 "--max-attempts", "2", "--retry-delay", "0"],
                tmp_path,
            )

        assert result.exit_code == 1
        assert len(fake.commands("--set-default")) == 2
        assert "Failed step: Default Instance" in result.output
        assert fake.commands("useradd") == []

    def test_empty_password_exit_1(self, fake, cli_runner, tmp_path):
        with mock.patch("wslbootstrap.commands.provision.Prompt.ask", side_effect=[""]):
            result = invoke(
                cli_runner, ["provision", "-n", "vm", "-u", "ansible"], tmp_path
            )

        assert result.exit_code == 1
        assert "Password cannot be empty" in result.output
        assert fake.calls == []

    def test_rejects_zero_attempts(self, cli_runner, tmp_path):
        result = invoke(cli_runner, ["provision", "--max-attempts", "0"], tmp_path)
        assert result.exit_code == 2

    def test_credential_cleared_when_log_dir_is_unusable(self, fake, cli_runner, tmp_path):
        (tmp_path / "logs").write_text("not a directory")
        created = []

        def recording_credential(*args):
            credential = Credential(*args)
            created.append(credential)
            return credential

        with mock.patch(
            "wslbootstrap.commands.provision.Prompt.ask", side_effect=["hunter2"]
        ), mock.patch(
            "wslbootstrap.commands.provision.Credential", side_effect=recording_credential
        ):
            result = invoke(
                cli_runner, ["provision", "-n", "vm", "-u", "ansible"], tmp_path
            )

        assert result.exit_code == 1
        assert len(created) == 1
        assert created[0].is_cleared
        assert "hunter2" not in result.output
        assert fake.calls == []


class TestDecommission:
    def test_typed_delete_unregisters(self, fake, cli_runner, tmp_path):
        fake.on("--list --verbose", ok(INSTANCE_LISTING))

        result = invoke(
            cli_runner, ["decommission", "-n", "control-node"], tmp_path, input="DELETE\n"
        )

        assert result.exit_code == 0, result.output
        assert "control-node" in result.output
        assert fake.commands("--unregister") == ["wsl --unregister control-node"]

    def test_anything_else_cancels(self, fake, cli_runner, tmp_path):
        result = invoke(
            cli_runner, ["decommission", "-n", "control-node"], tmp_path, input="delete\n"
        )

        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert fake.commands("--unregister") == []

    def test_unregister_failure_exit_1(self, fake, cli_runner, tmp_path):
        fake.on("--unregister", fail(stdout="There is no distribution with the supplied name."))

        result = invoke(
            cli_runner, ["decommission", "-n", "ghost"], tmp_path, input="DELETE\n"
        )

        assert result.exit_code == 1
        assert len(fake.commands("--unregister")) == 1

    def test_closed_stdin_cancels(self, fake, cli_runner, tmp_path):
        result = invoke(
            cli_runner, ["decommission", "-n", "control-node"], tmp_path, input=""
        )

        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert fake.commands("--unregister") == []

    def test_markup_in_typed_name_cancels_cleanly(self, fake, cli_runner, tmp_path):
        fake.on("--list --verbose", ok(INSTANCE_LISTING))

        result = invoke(cli_runner, ["decommission"], tmp_path, input="x[/]\nno\n")

        assert result.exit_code == 0, result.output
        assert "Deletion of 'x[/]' cancelled" in result.output
        assert fake.commands("--unregister") == []

    def test_markup_in_preset_name_is_printed_literally(self, fake, cli_runner, tmp_path):
        result = invoke(
            cli_runner, ["decommission", "-n", "vm[/]"], tmp_path, input="DELETE\n"
        )

        assert result.exit_code == 0, result.output
        assert "Instance 'vm[/]' unregistered" in result.output
        assert fake.commands("--unregister") == ["wsl --unregister vm[/]"]


class TestListings:
    def test_instances(self, fake, cli_runner, tmp_path):
        fake.on("--list --verbose", ok(INSTANCE_LISTING))

        result = invoke(cli_runner, ["instances"], tmp_path)

        assert result.exit_code == 0
        assert "control-node" in result.output
        assert "2 instance(s) registered" in result.output

    def test_instances_failure(self, fake, cli_runner, tmp_path):
        fake.on("--list --verbose", fail(exit_code=127))

        result = invoke(cli_runner, ["instances"], tmp_path)

        assert result.exit_code == 1

    def test_distributions(self, fake, cli_runner, tmp_path):
        fake.on("--list --online", ok(CATALOG_LISTING))

        result = invoke(cli_runner, ["distributions"], tmp_path)

        assert result.exit_code == 0
        assert "kali-linux" in result.output

    def test_distributions_empty_catalog(self, fake, cli_runner, tmp_path):
        fake.on("--list --online", ok(""))

        result = invoke(cli_runner, ["distributions"], tmp_path)

        assert result.exit_code == 1


def test_help_lists_commands(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("provision", "decommission", "instances", "distributions"):
        assert command in result.output
