"""Tests for guest_service module."""

from tests.helpers import fail, ok
from wslbootstrap.exceptions import ExecError
from wslbootstrap.models import Credential
from wslbootstrap.services.guest_service import GuestService


class TestCreateUser:
    def test_creates_missing_user(self, runner, wsl):
        runner.on("-- id -u", fail())

        result = GuestService(wsl).create_user("vm", Credential("ansible", "pw"))

        assert result.is_success
        assert runner.commands("useradd") == [
            "wsl -d vm -u root -- useradd -m -s /bin/bash ansible"
        ]
        assert runner.commands("usermod") == ["wsl -d vm -u root -- usermod -aG sudo ansible"]

    def test_existing_user_is_not_recreated(self, runner, wsl):
        runner.on("-- id -u", ok("1000"))

        result = GuestService(wsl).create_user("vm", Credential("ansible", "pw"))

        assert result.is_success
        assert runner.commands("useradd") == []
        assert len(runner.commands("chpasswd")) == 1

    def test_password_goes_through_stdin_only(self, runner, wsl):
        GuestService(wsl).create_user("vm", Credential("ansible", "hunter2"))

        chpasswd = [c for c in runner.calls if "chpasswd" in c.argv][0]
        assert chpasswd.stdin == b"ansible:hunter2\n"
        assert all("hunter2" not in c.command for c in runner.calls)

    def test_stdin_buffer_is_wiped_after_use(self, runner, wsl):
        GuestService(wsl).create_user("vm", Credential("ansible", "hunter2"))

        chpasswd = [c for c in runner.calls if "chpasswd" in c.argv][0]
        assert set(chpasswd.stdin_buffer) == {0}

    def test_stdin_buffer_is_wiped_on_failure(self, runner, wsl):
        runner.on("chpasswd", fail(stderr="chpasswd: line 1: user 'ansible' does not exist"))

        result = GuestService(wsl).create_user("vm", Credential("ansible", "hunter2"))

        assert isinstance(result.error, ExecError)
        chpasswd = [c for c in runner.calls if "chpasswd" in c.argv][0]
        assert set(chpasswd.stdin_buffer) == {0}
        assert runner.commands("usermod") == []

    def test_useradd_failure_stops(self, runner, wsl):
        runner.on("-- id -u", fail())
        runner.on("useradd", fail(stderr="useradd: invalid user name"))

        result = GuestService(wsl).create_user("vm", Credential("Bad Name", "pw"))

        assert result.is_failure
        assert "invalid user name" in result.error.context
        assert runner.commands("chpasswd") == []


class TestInstallPackages:
    def test_runs_steps_in_order_and_reports_version(self, runner, wsl):
        runner.on("ansible --version", ok("ansible [core 2.16.3]\n  config file = None\n"))

        result = GuestService(wsl).install_packages("vm", "ansible")

        assert result.value == "ansible [core 2.16.3]"
        commands = runner.commands()
        assert "apt-get update" in commands[0]
        assert "apt-get install -y python3 python3-pip" in commands[1]
        assert commands[2].startswith("wsl -d vm -u ansible --")
        assert "pip install --user ansible" in commands[2]
        assert commands[3] == 'wsl -d vm -u ansible -- bash -lc ansible --version'

    def test_apt_runs_as_root(self, runner, wsl):
        GuestService(wsl).install_packages("vm", "ansible")

        for call in runner.calls[:2]:
            assert call.argv[3:5] == ["-u", "root"]

    def test_failed_step_stops_the_rest(self, runner, wsl):
        runner.on("apt-get install", fail(exit_code=100, stderr="E: Unable to locate package"))

        result = GuestService(wsl).install_packages("vm", "ansible")

        assert result.is_failure
        assert "exit code 100" in result.error.message
        assert runner.commands("pip install") == []

    def test_failed_verification(self, runner, wsl):
        runner.on("ansible --version", fail(exit_code=127, stderr="ansible: command not found"))

        result = GuestService(wsl).install_packages("vm", "ansible")

        assert result.is_failure
        assert "Verifying Ansible" in result.error.message
