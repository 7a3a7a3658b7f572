# tests/test_cli.py
"""Tests for the command-line interface."""

import json
import logging
import tempfile
from pathlib import Path

import pytest

from resreg.cli import main
from resreg.log import configure_logging


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_logger():
    """Detach handlers installed by the CLI so they don't outlive capsys."""
    yield
    logger = logging.getLogger("resreg")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config_file(temp_dir):
    path = temp_dir / "resreg.yaml"
    path.write_text(
        "storage:\n"
        "  backend: file\n"
        f"  path: {temp_dir / 'data'}\n"
        "registries:\n"
        "  - type: Asset\n"
        "    id: org.acme.Car\n"
        "    name: Cars\n"
    )
    return str(path)


def write_json(path: Path, data) -> str:
    path.write_text(json.dumps(data))
    return str(path)


def car(identifier, colour="red"):
    return {"$class": "org.acme.Car", "$identifier": identifier, "colour": colour}


class TestCli:
    """End-to-end CLI tests over file storage."""

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_registries(self, config_file, capsys):
        assert main(["--config", config_file, "registries", "Asset"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out == [{"type": "Asset", "id": "org.acme.Car", "name": "Cars"}]

    def test_add_list_get_remove(self, config_file, temp_dir, capsys):
        cars = write_json(temp_dir / "cars.json", [car("A"), car("B")])

        assert main(["--config", config_file, "add", "Asset", "org.acme.Car", cars]) == 0
        capsys.readouterr()

        assert main(["--config", config_file, "list", "Asset", "org.acme.Car"]) == 0
        listed = json.loads(capsys.readouterr().out)
        assert sorted(obj["$identifier"] for obj in listed) == ["A", "B"]

        updated = write_json(temp_dir / "update.json", car("A", "blue"))
        assert main(["--config", config_file, "update", "Asset", "org.acme.Car", updated]) == 0
        capsys.readouterr()

        assert main(["--config", config_file, "get", "Asset", "org.acme.Car", "A"]) == 0
        assert json.loads(capsys.readouterr().out)["colour"] == "blue"

        assert main(["--config", config_file, "remove", "Asset", "org.acme.Car", "A", "B"]) == 0
        capsys.readouterr()

        assert main(["--config", config_file, "list", "Asset", "org.acme.Car"]) == 0
        assert json.loads(capsys.readouterr().out) == []

    def test_create_registry(self, config_file, capsys):
        assert main(["--config", config_file, "create-registry", "Participant", "org.acme.Person", "People"]) == 0
        capsys.readouterr()
        assert main(["--config", config_file, "registries", "Participant"]) == 0
        assert json.loads(capsys.readouterr().out)[0]["name"] == "People"

    def test_missing_resource_reports_error(self, config_file, capsys):
        assert main(["--config", config_file, "get", "Asset", "org.acme.Car", "nope"]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_missing_registry_reports_error(self, config_file, capsys):
        assert main(["--config", config_file, "list", "Asset", "org.acme.Boat"]) == 1
        assert "Asset:org.acme.Boat" in capsys.readouterr().err

    def test_bad_config(self, temp_dir, capsys):
        path = write_json(temp_dir / "bad.yaml", {"storage": {"backend": "redis"}})
        assert main(["--config", path, "registries", "Asset"]) == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_malformed_resource_file(self, config_file, temp_dir, capsys):
        bad = write_json(temp_dir / "bad.json", {"colour": "red"})
        assert main(["--config", config_file, "add", "Asset", "org.acme.Car", bad]) == 1
        assert "$class" in capsys.readouterr().err

    @pytest.mark.parametrize("data", [5, "VIN-1", None, True])
    def test_scalar_resource_file(self, config_file, temp_dir, capsys, data):
        bad = write_json(temp_dir / "scalar.json", data)
        assert main(["--config", config_file, "add", "Asset", "org.acme.Car", bad]) == 1
        assert "expected a resource object or a list" in capsys.readouterr().err

    def test_relationships_in_resource_file(self, config_file, temp_dir, capsys):
        owned = dict(car("A"), owner={"$ref": "resource:org.acme.Person#alice"}, note="resource: see manual")
        path = write_json(temp_dir / "owned.json", owned)

        assert main(["--config", config_file, "add", "Asset", "org.acme.Car", path]) == 0
        capsys.readouterr()
        assert main(["--config", config_file, "get", "Asset", "org.acme.Car", "A"]) == 0

        assert json.loads(capsys.readouterr().out) == owned

    def test_no_convert_relationships_flag(self, config_file, temp_dir):
        path = write_json(temp_dir / "cars.json", car("A"))
        with pytest.raises(SystemExit):
            main(["--config", config_file, "add", "Asset", "org.acme.Car", path, "--convert-relationships"])


class TestConfigureLogging:
    """Test logging setup."""

    def test_idempotent(self):
        logger = configure_logging(logging.INFO)
        count = len(logger.handlers)

        configure_logging(logging.DEBUG)

        assert len(logger.handlers) == count
        assert logger.level == logging.DEBUG
