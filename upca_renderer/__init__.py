"""
Пакет UPC-A Renderer
====================

Генератор штрихкодов UPC-A с размещением цифр по GS1.

Этот пакет предоставляет:
    - Расчёт и проверку контрольной цифры UPC-A
    - Нормализацию ввода (11/12 цифр, дополнение нулями, политики checksum)
    - Кодирование в 95-модульный рисунок штрихов
    - Растровый вывод через Pillow (PNG, data URL, асинхронный blob)
    - Векторный вывод SVG
    - Стили "notched" (выступающие ограничители) и "flat"

Пример базового использования:
    >>> from upca_renderer import to_vector_string, format_upc, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> svg = to_vector_string("03600029145", {"module_width": 3})
    >>> format_upc("03600029145")
    '0-36000-29145-2'
    >>>
    >>> surface = RasterSurface()
    >>> render(surface, "036000291452", {"checksum": "validate"})
    >>> surface.image.save("upc.png")
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "1.0.0"
__author__ = "UPC-A Renderer Development Team"
__description__ = "UPC-A barcode encoder with raster (Pillow) and SVG output"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"UPC-A Renderer требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

_ROOT_LOGGER_NAME = "upca_renderer"


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения UPCA_LOG_FILE
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень логирования задаётся переменной окружения UPCA_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get("UPCA_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = os.environ.get("UPCA_LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён ``upca_renderer``.

    Аргументы:
        module_name: Обычно ``__name__``.

    Пример:
        >>> get_logger("my_plugin").name
        'upca_renderer.my_plugin'
        >>> get_logger("__main__").name
        'upca_renderer.main'
    """
    if module_name.startswith(_ROOT_LOGGER_NAME):
        full_name = module_name
    elif module_name == "__main__":
        full_name = f"{_ROOT_LOGGER_NAME}.main"
    else:
        # Удаляем ведущие точки из относительных импортов
        full_name = f"{_ROOT_LOGGER_NAME}.{module_name.lstrip('.')}"
    return logging.getLogger(full_name)


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

DEFAULT_CONFIG_FILE = "upca_config.json"


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить опции рендеринга по умолчанию из JSON-файла.

    Пользовательские значения накладываются на документированные
    значения по умолчанию. Если файл отсутствует или некорректен,
    возвращаются значения по умолчанию (с записью в лог).

    Аргументы:
        config_path: Путь к файлу. Если None, ищет 'upca_config.json'
                    в текущем каталоге.

    Возвращает:
        Словарь со всеми опциями RenderOptions; пригоден для
        ``RenderOptions.from_mapping``.

    Пример:
        >>> options = RenderOptions.from_mapping(load_config())
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)

    config = DEFAULT_OPTIONS.to_dict()

    if not config_path.exists():
        logger.info(
            "Файл конфигурации %s не найден. Используется конфигурация по умолчанию.",
            config_path,
        )
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(
                f"Файл конфигурации должен содержать JSON-объект, "
                f"получен {type(user_config).__name__}"
            )
        # Проверяем имена и значения опций до слияния
        RenderOptions.from_mapping(user_config)
        config.update(user_config)
        logger.info("Конфигурация загружена из %s", config_path)
        logger.debug("Конфигурация: %s", config)
    except json.JSONDecodeError as e:
        logger.warning(
            "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
            "Используется конфигурация по умолчанию.",
            config_path,
            e.lineno,
            e.colno,
        )
    except OSError as e:
        logger.warning(
            "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
            config_path,
            e,
        )
    except ValueError as e:
        # InvalidOptionError тоже ValueError
        logger.warning(
            "Недопустимый формат конфигурации: %s. Используется конфигурация по умолчанию.",
            e,
        )

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить доступность зависимостей растрового вывода.

    Возвращает:
        {"pillow": ..., "freetype": ...}. Без FreeType Pillow не
        масштабирует шрифт по умолчанию, и цифры выводятся
        растровым шрифтом фиксированного размера.
    """
    dependencies: Dict[str, bool] = {}

    try:
        from PIL import features

        dependencies["pillow"] = True
        dependencies["freetype"] = bool(features.check("freetype2"))
    except ImportError:
        dependencies["pillow"] = False
        dependencies["freetype"] = False

    return dependencies


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from upca_renderer.barcodegen import (  # noqa: E402
    DEFAULT_OPTIONS,
    SVG_NS,
    BlobEncodingError,
    EncodedSymbol,
    InvalidChecksumError,
    InvalidLengthError,
    InvalidOptionError,
    InvalidTargetError,
    RasterSurface,
    RenderOptions,
    RenderOptionsDict,
    UPCAGenerator,
    UPCAGenError,
    VectorSurface,
    calculate_checksum,
    encode,
    format_upc,
    normalize_input,
    render,
    render_to_vector,
    to_image_blob,
    to_image_bytes,
    to_image_data_url,
    to_vector_string,
    validate,
)
from upca_renderer.model.enums import BarStyle, ChecksumPolicy  # noqa: E402

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "get_logger",
    "load_config",
    "check_dependencies",
    "render",
    "render_to_vector",
    "to_image_data_url",
    "to_image_blob",
    "to_image_bytes",
    "to_vector_string",
    "encode",
    "validate",
    "calculate_checksum",
    "normalize_input",
    "format_upc",
    "EncodedSymbol",
    "RasterSurface",
    "VectorSurface",
    "UPCAGenerator",
    "RenderOptions",
    "RenderOptionsDict",
    "DEFAULT_OPTIONS",
    "SVG_NS",
    "BarStyle",
    "ChecksumPolicy",
    "UPCAGenError",
    "InvalidChecksumError",
    "InvalidLengthError",
    "InvalidTargetError",
    "BlobEncodingError",
    "InvalidOptionError",
]


_setup_logging()

_logger = get_logger(__name__)
_logger.debug("UPC-A Renderer v%s инициализирован", __version__)
