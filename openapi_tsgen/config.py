"""
Конфигурация для генерации TypeScript типов
"""

import os
from dataclasses import asdict, dataclass, fields
from typing import Dict, Optional

import toml

from .errors import ConfigError

ENCODING_MODES = ("uriComponent", "rfc3986")


@dataclass
class OpenApiConfig:
    """Конфигурация одной цели генерации"""

    file: Optional[str] = None
    url: Optional[str] = None
    # "yaml" | "json", по умолчанию определяется по расширению или ответу сервера
    format: Optional[str] = None
    output: Optional[str] = None
    skip_hooks: bool = False
    validation: bool = False
    custom_import: Optional[str] = None
    path_parameters_encoding_mode: Optional[str] = None
    transformer: Optional[str] = None
    custom_generator: Optional[str] = None

    def __post_init__(self):
        if self.format and self.format not in ("yaml", "json"):
            raise ConfigError(f"Неизвестный формат {self.format!r}, ожидается yaml или json")
        if (
            self.path_parameters_encoding_mode
            and self.path_parameters_encoding_mode not in ENCODING_MODES
        ):
            raise ConfigError(
                f"Неизвестный режим кодирования {self.path_parameters_encoding_mode!r}, "
                f"ожидается один из {ENCODING_MODES}"
            )

    @classmethod
    def from_dict(cls, data: Dict) -> "OpenApiConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Неизвестные параметры конфигурации: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(
        cls, config_path: str = "openapi.toml", search_dir: str = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка одиночной конфигурации из файла"""
        targets = load_targets(config_path, search_dir)
        if targets is None:
            return None
        if len(targets) != 1:
            raise ConfigError(
                f"В {config_path} несколько целей, используйте load_targets"
            )
        return next(iter(targets.values()))

    def save_to_file(self, config_path: str = "openapi.toml") -> None:
        """Сохранение конфигурации в файл"""
        config_data = {k: v for k, v in asdict(self).items() if v not in (None, False)}

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiConfig(
            file=getattr(args, "file", None) or self.file,
            url=getattr(args, "url", None) or self.url,
            format=self.format,
            output=getattr(args, "output", None) or self.output,
            skip_hooks=getattr(args, "skip_hooks", False) or self.skip_hooks,
            validation=getattr(args, "validation", False) or self.validation,
            custom_import=getattr(args, "custom_import", None) or self.custom_import,
            path_parameters_encoding_mode=getattr(args, "encoding_mode", None)
            or self.path_parameters_encoding_mode,
            transformer=self.transformer,
            custom_generator=self.custom_generator,
        )


def load_targets(
    config_path: str = "openapi.toml", search_dir: str = None
) -> Optional[Dict[str, OpenApiConfig]]:
    """
    Все цели генерации из toml файла.

    Поддерживаются плоская таблица (одна цель с именем "default")
    и таблицы `[targets.<name>]`.
    """
    # Если указана директория для поиска, ищем конфиг там
    if search_dir and os.path.isdir(search_dir):
        config_in_dir = os.path.join(search_dir, "openapi.toml")
        if os.path.exists(config_in_dir):
            config_path = config_in_dir

    if not os.path.exists(config_path):
        return None

    try:
        config_data = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Некорректный toml в {config_path}: {e}") from e

    if "targets" in config_data:
        return {
            name: OpenApiConfig.from_dict(target)
            for name, target in config_data["targets"].items()
        }
    return {"default": OpenApiConfig.from_dict(config_data)}
