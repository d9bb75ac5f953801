"""Получение текста спецификации из файла или по URL"""

import os
from typing import Optional, Tuple

import httpx

from ...errors import ConfigError, SpecLoadError

USER_AGENT = "openapi-tsgen-importer"


def format_from_path(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    return "yaml" if ext in (".yaml", ".yml") else "json"


def read_file(path: str) -> Tuple[str, str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read(), format_from_path(path)
    except OSError as e:
        raise SpecLoadError(f"Не удалось прочитать {path}: {e}") from e


def fetch_url(url: str, timeout: float = 30.0) -> Tuple[str, str]:
    try:
        response = httpx.get(
            url,
            headers={"user-agent": USER_AGENT},
            timeout=timeout,
            follow_redirects=True,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise SpecLoadError(f"Не удалось загрузить спецификацию из {url}: {e}") from e

    content_type = response.headers.get("content-type", "")
    if url.endswith(".json") or content_type.startswith("application/json"):
        return response.text, "json"
    return response.text, "yaml"


def load_spec_text(
    file: Optional[str] = None, url: Optional[str] = None
) -> Tuple[str, str]:
    """Текст спецификации и его формат ("yaml" | "json")"""
    if file:
        return read_file(file)
    if url:
        return fetch_url(url)
    raise ConfigError("Укажите спецификацию через file или url")
