"""Настройки редактора из окружения (и файла `.env`) и настройка логирования."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class EditorConfig:
    """Fields:
        image_dir: Каталог, в котором ищутся изображения по имени.
        output_dir: Каталог для `save` и `saveas`.
        max_header_lines: Сколько строк заголовка можно пропустить в поисках положительных размеров.
        log_level: Уровень корневого логгера.
    """
    image_dir: Path = Path("target_images")
    output_dir: Path = Path("target_images") / "new images"
    max_header_lines: int = 1024
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EditorConfig":
        load_dotenv(find_dotenv(usecwd=True))
        max_header_lines = int(os.getenv("PNM_EDITOR_MAX_HEADER_LINES", "1024"))
        if max_header_lines <= 0:
            raise ValueError(f"PNM_EDITOR_MAX_HEADER_LINES должно быть положительным: {max_header_lines}")
        return cls(
            image_dir=Path(os.getenv("PNM_EDITOR_IMAGE_DIR", "target_images")),
            output_dir=Path(os.getenv("PNM_EDITOR_OUTPUT_DIR", os.path.join("target_images", "new images"))),
            max_header_lines=max_header_lines,
            log_level=os.getenv("PNM_EDITOR_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
