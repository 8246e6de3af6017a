"""
Модульные тесты для upca_renderer/__init__.py
Тестирует метаданные, логирование, конфигурацию и публичный API.
"""

import json
import logging
import re
from pathlib import Path

import pytest

import upca_renderer


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        assert re.match(r"^\d+\.\d+\.\d+$", upca_renderer.__version__)

    def test_version_components(self) -> None:
        expected_version = (
            f"{upca_renderer.VERSION_MAJOR}."
            f"{upca_renderer.VERSION_MINOR}."
            f"{upca_renderer.VERSION_PATCH}"
        )
        assert upca_renderer.__version__ == expected_version

    def test_metadata_attributes(self) -> None:
        for attr in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(upca_renderer, attr)
            assert isinstance(value, str) and value, f"{attr} должен быть непустой строкой"


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        for name in upca_renderer.__all__:
            assert hasattr(upca_renderer, name), f"Имя '{name}' из __all__ не существует"

    def test_no_duplicate_exports(self) -> None:
        assert len(upca_renderer.__all__) == len(set(upca_renderer.__all__))

    def test_render_functions_exported(self) -> None:
        for name in ("render", "render_to_vector", "to_image_data_url", "to_image_blob"):
            assert callable(getattr(upca_renderer, name))

    def test_top_level_round_trip(self) -> None:
        assert upca_renderer.format_upc("03600029145") == "0-36000-29145-2"
        assert upca_renderer.to_vector_string("03600029145").startswith("<svg")


class TestLogging:
    """Тестирование конфигурации логирования."""

    def test_get_logger_name_format(self) -> None:
        assert upca_renderer.get_logger("my_plugin").name == "upca_renderer.my_plugin"

    def test_get_logger_with_qualified_name(self) -> None:
        name = "upca_renderer.barcodegen.raster"
        assert upca_renderer.get_logger(name).name == name

    def test_get_logger_with_main(self) -> None:
        assert upca_renderer.get_logger("__main__").name == "upca_renderer.main"

    def test_get_logger_strips_leading_dots(self) -> None:
        assert upca_renderer.get_logger(".plugin").name == "upca_renderer.plugin"

    def test_logger_is_configured(self) -> None:
        root = logging.getLogger("upca_renderer")
        assert root.handlers
        assert root.propagate is False

    def test_setup_logging_idempotent(self) -> None:
        root = logging.getLogger("upca_renderer")
        count = len(root.handlers)
        upca_renderer._setup_logging()
        assert len(root.handlers) == count


class TestConfiguration:
    """Тестирование загрузки конфигурации."""

    def test_load_config_missing_file(self, tmp_path: Path) -> None:
        config = upca_renderer.load_config(tmp_path / "absent.json")
        assert config == upca_renderer.DEFAULT_OPTIONS.to_dict()

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "upca_config.json"
        path.write_text(json.dumps({"module_width": 3, "style": "flat"}), encoding="utf-8")

        config = upca_renderer.load_config(path)

        assert config["module_width"] == 3
        assert config["style"] == "flat"
        assert config["bar_height"] == 70
        options = upca_renderer.RenderOptions.from_mapping(config)
        assert options.style is upca_renderer.BarStyle.FLAT

    def test_load_config_invalid_json(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="upca_renderer"):
            config = upca_renderer.load_config(path)

        assert config == upca_renderer.DEFAULT_OPTIONS.to_dict()

    def test_load_config_non_dict_json(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert upca_renderer.load_config(path) == upca_renderer.DEFAULT_OPTIONS.to_dict()

    @pytest.mark.parametrize(
        "payload",
        [{"dpi": 300}, {"module_width": 0}, {"checksum": "never"}],
    )
    def test_load_config_rejects_invalid_options(self, tmp_path: Path, payload: dict) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        assert upca_renderer.load_config(path) == upca_renderer.DEFAULT_OPTIONS.to_dict()


class TestDependencyCheck:
    """Тестирование проверки зависимостей."""

    def test_check_dependencies_keys(self) -> None:
        deps = upca_renderer.check_dependencies()
        assert set(deps) == {"pillow", "freetype"}
        assert all(isinstance(v, bool) for v in deps.values())
        assert deps["pillow"] is True
