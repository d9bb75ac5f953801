"""Утилиты для работы с именами типов, ключей и путей"""

import json
import re
from typing import List, Optional

from ...errors import GenerationError

IDENTIFIER_RE = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")
PATH_PARAM_RE = re.compile(r"\{(\w+)}")

_SEPARATOR_RE = re.compile(r"[\W_]+")
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def pascal_case(name: str) -> str:
    """
    PascalCase с учетом camelCase границ и спецсимволов.

    Не-ASCII фрагменты (`Питомец`) сохраняются целиком, первая буква
    переводится в верхний регистр.

    Examples:
        >>> pascal_case("listPets")
        'ListPets'
        >>> pascal_case("pet-store_item")
        'PetStoreItem'
        >>> pascal_case("HTTPError")
        'HTTPError'
        >>> pascal_case("мой_питомец")
        'МойПитомец'
    """
    if not name:
        return ""

    parts = []
    for chunk in _SEPARATOR_RE.split(name):
        if not chunk:
            continue
        if not chunk.isascii():
            parts.append(chunk[0].upper() + chunk[1:])
            continue

        for word in _WORD_RE.findall(chunk):
            # Аббревиатуры оставляем как есть
            if word.isupper():
                parts.append(word)
            else:
                parts.append(word[0].upper() + word[1:].lower())

    result = "".join(parts)
    if not result:
        raise GenerationError(f"Не удалось построить имя типа из {name!r}")
    if result[0].isdigit():
        result = "_" + result
    return result


def is_identifier(name: str) -> bool:
    return bool(IDENTIFIER_RE.match(name))


def property_key(name: str) -> str:
    """Ключ свойства: как есть для валидных идентификаторов, иначе в кавычках"""
    return name if is_identifier(name) else quote(name)


def quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def get_params_in_path(path: str) -> List[str]:
    """
    Все параметры шаблона пути в порядке появления.

    Examples:
        >>> get_params_in_path("/pet/{category}/{name}/")
        ['category', 'name']
    """
    return PATH_PARAM_RE.findall(path)


def format_description(description: Optional[str], tab_size: int = 0) -> str:
    """Описание в виде JSDoc комментария"""
    if not description:
        return ""

    indent = " " * tab_size
    lines = "\n".join(f"{indent} * {line}" for line in description.split("\n"))
    return f"/**\n{lines}\n{indent} */\n{indent}"
