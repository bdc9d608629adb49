import pytest
from click.testing import CliRunner

from blobdata import prop


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.toml"


@pytest.fixture
def body_blob():
    """A body_simulation-shaped blob with a handful of attributes."""
    return (
        b"BodySimulationComponent\x00"
        + prop("IsDead", "BoolProperty", 0)
        + prop("BaseStrength", "FloatProperty", 4.5)
        + prop("BaseConstitution", "FloatProperty", 3.25)
        + prop("BaseDexterity", "FloatProperty", 2.0)
        + prop("InitialAge", "IntProperty", 27)
        + prop("LifeTimeSinceSpawn", "DoubleProperty", 12345.5)
        + b"\x00" * 8
    )


@pytest.fixture
def body_blob_path(tmp_path, body_blob):
    path = tmp_path / "body.bin"
    path.write_bytes(body_blob)
    return path
