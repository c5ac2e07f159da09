"""Поиск файла изображения по имени.

Принципы:
- SRP: только разрешение имени в путь; чтение файла делает `CodecService`.
"""
from __future__ import annotations

from pathlib import Path

from pnm_editor.models.image_model import ImageFormat

SEARCH_EXTENSIONS = tuple(fmt.extension for fmt in (ImageFormat.PPM, ImageFormat.PGM, ImageFormat.PBM))


class FileService:
    def __init__(self, image_dir: str | Path = Path("target_images")) -> None:
        self.image_dir = Path(image_dir)

    def resolve(self, name: str) -> Path:
        """Находит файл по имени.

        Порядок: путь как есть, `image_dir/name`, `image_dir/name` с расширениями
        .ppm/.pgm/.pbm, затем совпадение имени или имени без расширения без учёта регистра.

        Raises:
            FileNotFoundError: если ни один вариант не найден.
        """
        direct = Path(name)
        if direct.is_file():
            return direct

        in_dir = self.image_dir / name
        if in_dir.is_file():
            return in_dir

        for ext in SEARCH_EXTENSIONS:
            candidate = self.image_dir / f"{name}{ext}"
            if candidate.is_file():
                return candidate

        if self.image_dir.is_dir():
            wanted = name.lower()
            for candidate in sorted(self.image_dir.iterdir()):
                if not candidate.is_file():
                    continue
                if candidate.name.lower() == wanted or candidate.stem.lower() == wanted:
                    return candidate

        raise FileNotFoundError(f"Файл не найден: {name} (поиск в каталоге {self.image_dir})")
