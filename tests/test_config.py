from pathlib import Path

import pytest

from pnm_editor.config import EditorConfig

ENV_NAMES = (
    "PNM_EDITOR_IMAGE_DIR",
    "PNM_EDITOR_OUTPUT_DIR",
    "PNM_EDITOR_MAX_HEADER_LINES",
    "PNM_EDITOR_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # .env из рабочего каталога не должен влиять на тесты
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = EditorConfig.from_env()
    assert config.image_dir == Path("target_images")
    assert config.output_dir == Path("target_images") / "new images"
    assert config.max_header_lines == 1024
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PNM_EDITOR_IMAGE_DIR", "in")
    monkeypatch.setenv("PNM_EDITOR_OUTPUT_DIR", "out")
    monkeypatch.setenv("PNM_EDITOR_MAX_HEADER_LINES", "8")
    monkeypatch.setenv("PNM_EDITOR_LOG_LEVEL", "debug")
    config = EditorConfig.from_env()
    assert (config.image_dir, config.output_dir) == (Path("in"), Path("out"))
    assert config.max_header_lines == 8
    assert config.log_level == "DEBUG"


def test_dotenv_file(monkeypatch, tmp_path):
    # load_dotenv пишет в os.environ: регистрируем переменную, чтобы monkeypatch её убрал
    monkeypatch.setenv("PNM_EDITOR_IMAGE_DIR", "placeholder")
    monkeypatch.delenv("PNM_EDITOR_IMAGE_DIR")
    (tmp_path / ".env").write_text("PNM_EDITOR_IMAGE_DIR=from_dotenv\n", encoding="utf-8")
    assert EditorConfig.from_env().image_dir == Path("from_dotenv")


@pytest.mark.parametrize("value", ["0", "-1", "many"])
def test_bad_header_limit(monkeypatch, value):
    monkeypatch.setenv("PNM_EDITOR_MAX_HEADER_LINES", value)
    with pytest.raises(ValueError):
        EditorConfig.from_env()
