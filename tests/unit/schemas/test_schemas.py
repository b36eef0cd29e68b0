"""Unit tests for request body schemas."""

import base64

import pytest
from pydantic import ValidationError

from quilt_cli.core.exceptions import ResponseFormatError, UsageError
from quilt_cli.schemas import (
    ArchiveUpload,
    ContainerCreate,
    EnvironmentUpdate,
    ExecRequest,
    FileWrite,
    TerminalSessionCreate,
    VolumeCreate,
    b64encode_text,
    parse_env_pair,
)


class TestContainerSchemas:
    """Tests for container request bodies."""

    def test_create_wraps_shell_command(self):
        body = ContainerCreate.from_shell("web", "npm start && tail -f log")
        assert body.to_payload() == {
            "name": "web",
            "command": ["/bin/sh", "-c", "npm start && tail -f log"],
        }

    def test_create_without_command_omits_field(self):
        assert ContainerCreate.from_shell("web").to_payload() == {"name": "web"}

    def test_create_requires_name(self):
        with pytest.raises(ValidationError):
            ContainerCreate(name="")

    def test_exec_omits_unset_options(self):
        assert ExecRequest(command="ls").to_payload() == {
            "command": "ls",
            "capture_output": True,
            "detach": False,
        }

    def test_exec_base64(self):
        payload = ExecRequest.base64('printf "%s" "$HOME"', timeout_ms=1000).to_payload()
        assert payload == {
            "command": {"cmd_b64": b64encode_text('printf "%s" "$HOME"')},
            "capture_output": True,
            "detach": False,
            "timeout_ms": 1000,
        }

    def test_exec_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            ExecRequest(command="ls", timeout_ms=0)


class TestEnvSchemas:
    """Tests for KEY=VALUE parsing and env bodies."""

    @pytest.mark.parametrize(
        ("pair", "expected"),
        [
            ("A=1", ("A", "1")),
            ("A=", ("A", "")),
            ("URL=postgres://u:p@h/db?x=y", ("URL", "postgres://u:p@h/db?x=y")),
        ],
    )
    def test_parse_env_pair(self, pair, expected):
        assert parse_env_pair(pair) == expected

    @pytest.mark.parametrize("pair", ["NOEQ", "=value"])
    def test_parse_env_pair_invalid(self, pair):
        with pytest.raises(UsageError):
            parse_env_pair(pair)

    def test_from_pairs_last_wins(self):
        body = EnvironmentUpdate.from_pairs(["A=1", "A=2", "B=x"])
        assert body.to_payload() == {"environment": {"A": "2", "B": "x"}}

    def test_without_key(self):
        body = EnvironmentUpdate.without_key({"environment": {"A": "1", "B": "2"}}, "A")
        assert body.environment == {"B": "2"}

    def test_without_key_null_environment(self):
        body = EnvironmentUpdate.without_key({"environment": None}, "A")
        assert body.environment == {}

    def test_without_absent_key_keeps_everything(self):
        body = EnvironmentUpdate.without_key({"environment": {"A": "1"}}, "Z")
        assert body.environment == {"A": "1"}

    def test_without_key_keeps_value_types(self):
        current = {"environment": {"A": True, "B": "x", "N": 5, "Z": None}}
        body = EnvironmentUpdate.without_key(current, "B")
        assert body.to_payload() == {"environment": {"A": True, "N": 5, "Z": None}}

    def test_without_key_rejects_non_object(self):
        with pytest.raises(ResponseFormatError):
            EnvironmentUpdate.without_key({"environment": "A=1"}, "A")


class TestVolumeSchemas:
    """Tests for volume and file bodies."""

    def test_volume_create_defaults(self):
        assert VolumeCreate.from_cli("data").to_payload() == {"name": "data", "driver": "local"}

    def test_volume_create_labels(self):
        body = VolumeCreate.from_cli("data", '{"env": "prod", "n": 2}')
        assert body.labels == {"env": "prod", "n": 2}

    @pytest.mark.parametrize("labels", ["not json", "[1]", '"text"'])
    def test_volume_create_bad_labels(self, labels):
        with pytest.raises(UsageError):
            VolumeCreate.from_cli("data", labels)

    def test_archive_upload(self):
        payload = ArchiveUpload.from_bytes(b"\x1f\x8b", path="/app", strip_components=1).to_payload()
        assert payload == {
            "content": base64.b64encode(b"\x1f\x8b").decode(),
            "strip_components": 1,
            "path": "/app",
        }

    def test_archive_upload_rejects_negative_strip(self):
        with pytest.raises(ValidationError):
            ArchiveUpload(content="", strip_components=-1)

    def test_file_write_default_mode(self):
        payload = FileWrite.from_bytes("/etc/app.conf", b"k=v\n").to_payload()
        assert payload["mode"] == 644
        assert base64.b64decode(payload["content"]) == b"k=v\n"


class TestTerminalSchema:
    """Tests for terminal session bodies."""

    def test_defaults(self):
        assert TerminalSessionCreate(container_id="c1").to_payload() == {
            "target": "container",
            "container_id": "c1",
            "cols": 120,
            "rows": 30,
            "shell": "/bin/bash",
        }

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            TerminalSessionCreate(container_id="c1", colour="red")
