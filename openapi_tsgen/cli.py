import argparse
import logging
import os
import sys
from typing import Dict, List, Optional

from openapi_tsgen.config import ENCODING_MODES, OpenApiConfig, load_targets
from openapi_tsgen.errors import GenerationError
from openapi_tsgen.generator import import_open_api, load_callable
from openapi_tsgen.internal.parser.loader import load_spec_text


def _generate_core(config: OpenApiConfig) -> str:
    """Ядро генерации - только генерация без сохранения"""
    source = config.file or config.url
    print(f"🚀 Генерация типов из {source}")

    print("📥 Загрузка OpenAPI спецификации...")
    data, detected_format = load_spec_text(file=config.file, url=config.url)

    transformer = load_callable(config.transformer) if config.transformer else None
    custom_generator = (
        load_callable(config.custom_generator) if config.custom_generator else None
    )

    print("⚙️ Генерация кода...")
    return import_open_api(
        data,
        format=config.format or detected_format,
        transformer=transformer,
        validation=config.validation,
        skip_hooks=config.skip_hooks,
        custom_import=config.custom_import,
        path_parameters_encoding_mode=config.path_parameters_encoding_mode,
        custom_generator=custom_generator,
    )


def _save_output(content: str, output: Optional[str], target: Optional[str] = None):
    """Сохранение результата или вывод в stdout"""
    prefix = f"[{target}] " if target else ""

    if not output:
        print(content)
        print("⚠️ Путь вывода не указан, результат выведен в stdout")
        return

    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        f.write(content)

    print(f"✅ {prefix}Типы сгенерированы: {os.path.abspath(output)}")


def _select_targets(
    targets: Dict[str, OpenApiConfig], names: List[str]
) -> Dict[str, OpenApiConfig]:
    """Выбор целей по именам из аргументов (все, если имена не переданы)"""
    missing = [name for name in names if name not in targets]
    if missing:
        verb = "не определена" if len(missing) == 1 else "не определены"
        print(f"⚠️ {', '.join(missing)} {verb} в конфигурации!")

    if not names:
        return targets
    return {name: config for name, config in targets.items() if name in names}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript типов и react-query hooks из OpenAPI"
    )
    parser.add_argument("targets", nargs="*", help="Имена целей из конфига")
    parser.add_argument("-f", "--file", type=str, help="Файл спецификации (yaml/json)")
    parser.add_argument("-u", "--url", type=str, help="URL спецификации (yaml/json)")
    parser.add_argument("-o", "--output", type=str, help="Файл для результата")
    parser.add_argument(
        "--skip-hooks", action="store_true", help="Генерировать только типы"
    )
    parser.add_argument(
        "--validation", action="store_true", help="Проверить спецификацию перед генерацией"
    )
    parser.add_argument(
        "--encoding-mode",
        choices=ENCODING_MODES,
        help="Кодирование параметров пути",
    )
    parser.add_argument("--custom-import", type=str, help="Строка импорта в заголовок")
    parser.add_argument("--config", type=str, help="Конфиг openapi.toml с целями")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог")
    return parser


def generate(argv: Optional[List[str]] = None):
    """Универсальная команда генерации TypeScript типов"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.config:
            targets = load_targets(args.config)
            if targets is None:
                print(f"❌ Ошибка: конфиг {args.config} не найден")
                sys.exit(1)

            for name, config in _select_targets(targets, args.targets).items():
                content = _generate_core(config)
                _save_output(content, config.output, name)
            return

        if not args.file and not args.url:
            print("❌ Ошибка: укажите спецификацию через --file, --url или --config")
            sys.exit(1)

        config = OpenApiConfig().merge_with_args(args)
        content = _generate_core(config)
        _save_output(content, config.output)

    except GenerationError as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()
