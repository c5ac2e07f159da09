"""Чтение и запись изображений Netpbm в текстовом виде (P1, P2, P3).

Принципы:
- SRP: класс отвечает только за грамматику формата и файловый ввод-вывод.
- OCP: форматы различаются только телом; заголовок разбирается общим кодом.
- Ошибки разбора всегда `InvalidFormatError` с понятной причиной.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from pnm_editor.models.errors import InvalidFormatError, UnsupportedFormatError
from pnm_editor.models.image_model import MAX_COLOR_LIMIT, ImageFormat, NetpbmImage

logger = logging.getLogger(__name__)


def _tokenize(text: str) -> Tuple[List[str], List[int]]:
    """Токены и номера их строк; `#` открывает комментарий до конца строки."""
    tokens: List[str] = []
    lines: List[int] = []
    for line_no, line in enumerate(text.splitlines()):
        content = line.split("#", 1)[0]
        for token in content.split():
            tokens.append(token)
            lines.append(line_no)
    return tokens, lines


def _parse_int(token: str) -> Optional[int]:
    """Десятичное ASCII-число с необязательным знаком; иначе `None` (без `1_0` и не-ASCII цифр)."""
    digits = token[1:] if token[:1] in ("+", "-") else token
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(token)


def _is_int(token: str) -> bool:
    return _parse_int(token) is not None


class _TokenReader:
    def __init__(self, text: str) -> None:
        self._tokens, self._lines = _tokenize(text)
        self._pos = 0

    @property
    def line(self) -> int:
        """Номер строки текущего токена (или за концом потока)."""
        if self._pos < len(self._lines):
            return self._lines[self._pos]
        return self._lines[-1] + 1 if self._lines else 0

    def peek(self) -> Optional[str]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def next_token(self, what: str) -> str:
        token = self.peek()
        if token is None:
            raise InvalidFormatError(f"Неожиданный конец файла: ожидалось {what}")
        self._pos += 1
        return token

    def next_int(self, what: str) -> int:
        token = self.next_token(what)
        value = _parse_int(token)
        if value is None:
            raise InvalidFormatError(f"Ожидалось целое число ({what}), получено: {token}")
        return value

    def skip_line(self) -> None:
        current = self.line
        while self._pos < len(self._tokens) and self._lines[self._pos] == current:
            self._pos += 1

    def take(self, count: int, what: str) -> List[str]:
        end = self._pos + count
        if end > len(self._tokens):
            raise InvalidFormatError(
                f"Неожиданный конец файла: ожидалось {count} {what}, найдено {len(self._tokens) - self._pos}"
            )
        chunk = self._tokens[self._pos:end]
        self._pos = end
        return chunk


class CodecService:
    def __init__(self, max_header_lines: int = 1024) -> None:
        self.max_header_lines = max_header_lines

    # ---------- Разбор ----------
    def parse(self, text: str, path: Path | str = Path(), expected: Optional[ImageFormat] = None) -> NetpbmImage:
        """Разбирает текст Netpbm в изображение.

        Args:
            text: Содержимое файла.
            path: Файл, с которым будет связано изображение.
            expected: Если задан, magic number обязан ему соответствовать.

        Returns:
            `NetpbmImage` с проверенными размерами и отсчётами.

        Raises:
            InvalidFormatError: при нарушении грамматики, размеров или диапазона отсчётов.
            UnsupportedFormatError: если magic number не P1/P2/P3 и `expected` не задан.
        """
        reader = _TokenReader(text)
        magic = reader.peek()
        if magic is None:
            raise InvalidFormatError(f"Не найден magic number в файле: {Path(path).name}")
        reader.next_token("magic number")

        if expected is not None:
            if magic != expected.magic:
                raise InvalidFormatError(f"Неверный magic number для {expected.tag.upper()}: {magic}")
            fmt = expected
        else:
            fmt = ImageFormat.from_magic(magic)

        width, height = self._read_dimensions(reader)

        max_color: Optional[int] = None
        if fmt.has_max_color:
            max_color = reader.next_int("максимальное значение цвета")
            if max_color <= 0 or max_color > MAX_COLOR_LIMIT:
                raise InvalidFormatError(f"Недопустимое максимальное значение цвета: {max_color}")

        count = width * height * fmt.channels
        values = self._to_samples(reader.take(count, "отсчётов"))

        if fmt is ImageFormat.PBM:
            bad = values[(values != 0) & (values != 1)]
            if bad.size:
                raise InvalidFormatError(f"Недопустимое значение пикселя: {bad[0]}")
            pixels = values.reshape(height, width).astype(bool)
        else:
            bad = values[(values < 0) | (values > max_color)]
            if bad.size:
                raise InvalidFormatError(f"Значение пикселя вне диапазона: {bad[0]}")
            shape = (height, width, 3) if fmt is ImageFormat.PPM else (height, width)
            pixels = values.reshape(shape)

        return NetpbmImage(fmt, pixels, max_color, Path(path))

    def _read_dimensions(self, reader: _TokenReader) -> Tuple[int, int]:
        # Неположительная пара не ошибка: читаем дальше, но не бесконечно.
        start = reader.line
        while True:
            if reader.line - start >= self.max_header_lines:
                raise InvalidFormatError(
                    f"Не найдены положительные размеры за {self.max_header_lines} строк заголовка"
                )
            token = reader.peek()
            if token is None:
                raise InvalidFormatError("Не найдены положительные размеры изображения")
            if not _is_int(token):
                reader.skip_line()
                continue
            width = reader.next_int("ширина")
            height = reader.next_int("высота")
            if width > 0 and height > 0:
                return width, height

    @staticmethod
    def _to_samples(tokens: List[str]) -> np.ndarray:
        values = []
        for token in tokens:
            value = _parse_int(token)
            if value is None:
                raise InvalidFormatError(f"Нечисловое значение пикселя: {token}")
            # больше любого допустимого max; точная проверка по max ниже
            if abs(value) > MAX_COLOR_LIMIT:
                raise InvalidFormatError(f"Значение пикселя вне диапазона: {token}")
            values.append(value)
        return np.array(values, dtype=np.int64)

    # ---------- Запись ----------
    def serialize(self, image: NetpbmImage) -> str:
        """Текст Netpbm: magic, `"<w> <h>"`, max (кроме PBM), затем тело.

        PBM/PGM пишутся строкой изображения на строку файла, PPM - тройкой `R G B` на строку.
        """
        lines = [image.format.magic, f"{image.width} {image.height}"]
        if image.format.has_max_color:
            lines.append(str(image.max_color_value))

        if image.format is ImageFormat.PPM:
            for row in image.pixels.tolist():
                lines.extend(f"{r} {g} {b}" for r, g, b in row)
        else:
            for row in image.pixels.astype(np.int64).tolist():
                lines.append(" ".join(map(str, row)))
        return "\n".join(lines) + "\n"

    # ---------- Файлы ----------
    def probe(self, file_path: str | Path) -> Optional[ImageFormat]:
        """Определяет формат по первому значимому токену; `None` - формат не поддерживается.

        Читает файл только до первого токена и никогда не пробрасывает ошибки ввода-вывода.
        """
        try:
            with open(file_path, "r", encoding="utf-8") as fh:
                for line in fh:
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    return ImageFormat.from_magic(line.split()[0])
        except (OSError, UnicodeDecodeError, UnsupportedFormatError):
            return None
        return None

    def load(self, file_path: str | Path) -> NetpbmImage:
        """Загружает изображение с диска.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            InvalidFormatError: если файл не читается или не является корректным Netpbm.
            UnsupportedFormatError: если magic number не P1/P2/P3.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidFormatError(f"Не удаётся прочитать файл: {path}") from exc

        image = self.parse(text, path)
        logger.info("Загружено %s изображение %s: %dx%d", image.format.tag.upper(), path.name, image.width, image.height)
        return image

    def save(self, image: NetpbmImage, file_path: str | Path) -> Path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.serialize(image), encoding="ascii")
        logger.info("Сохранено %s изображение в %s", image.format.tag.upper(), path)
        return path
