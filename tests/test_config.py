from pathlib import Path

import pytest

from jpegheaderfixer.config import (
    BatchConfig,
    SAMPLE_CONFIG,
    get_policy,
    get_suffix,
    get_verify,
    load_config,
)
from jpegheaderfixer.core.errors import FileAccessError, UsageError
from jpegheaderfixer.core.models import RepairPolicy


def write_config(tmp_path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def test_environment_defaults():
    assert get_policy() == RepairPolicy.REFUSE
    assert get_verify() is False
    assert get_suffix() == "_fixed"


def test_environment_values(monkeypatch):
    monkeypatch.setenv("JPEGFIX_POLICY", "SPLIT")
    monkeypatch.setenv("JPEGFIX_VERIFY", "yes")
    monkeypatch.setenv("JPEGFIX_SUFFIX", "_ok")

    assert get_policy() == RepairPolicy.SPLIT
    assert get_verify() is True
    assert get_suffix() == "_ok"


def test_invalid_policy_env(monkeypatch):
    monkeypatch.setenv("JPEGFIX_POLICY", "patch")
    with pytest.raises(UsageError):
        get_policy()


def test_load_config(tmp_path):
    path = write_config(tmp_path, """
paths:
  - /photos
recursive: false
output_dir: /fixed
policy: split
extensions: [JPG, .jpeg]
""")
    config = load_config(path)

    assert config.paths == ["/photos"]
    assert config.recursive is False
    assert config.output_dir == "/fixed"
    assert config.policy == RepairPolicy.SPLIT
    assert config.extensions == [".jpg", ".jpeg"]
    assert config.suffix == "_fixed"


def test_sample_config_loads(tmp_path):
    config = load_config(write_config(tmp_path, SAMPLE_CONFIG))
    assert config.paths == ["/path/to/photos"]
    assert config.policy == RepairPolicy.REFUSE


def test_config_falls_back_to_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("JPEGFIX_POLICY", "split")
    monkeypatch.setenv("JPEGFIX_SUFFIX", "-repaired")

    config = load_config(write_config(tmp_path, "paths: [/photos]\n"))
    assert config.policy == RepairPolicy.SPLIT
    assert config.suffix == "-repaired"


def test_missing_config(tmp_path):
    with pytest.raises(FileAccessError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize("text", [
    "",
    "recursive: true\n",
    "paths: []\n",
    "paths: [/photos]\npolicy: overwrite\n",
    "- just\n- a list\n",
    "paths: [unclosed\n",
])
def test_invalid_config(tmp_path, text):
    with pytest.raises(UsageError):
        load_config(write_config(tmp_path, text))


def test_output_for_next_to_original():
    config = BatchConfig(paths=["/photos"])
    assert config.output_for(Path("/photos/a/IMG_1.jpg")) == Path("/photos/a/IMG_1_fixed.jpg")


def test_output_for_output_dir():
    config = BatchConfig(paths=["/photos"], output_dir="/fixed", suffix="")
    assert config.output_for(Path("/photos/a/IMG_1.JPG")) == Path("/fixed/IMG_1.JPG")
