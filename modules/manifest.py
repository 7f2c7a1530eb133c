# modules/manifest.py
"""Batch of checks described in a YAML manifest.

Example::

    schema_version: "1.0"
    checks:
      - type: user
        name: root
        exists: true
        uid: 0
      - type: package
        name: openssl
        installed: true
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from jsonschema import Draft7Validator

from modules import file as file_check
from modules import group as group_check
from modules import package as package_check
from modules import user as user_check
from modules.command_executor import Runner
from modules.os_detect import PackageManager
from modules.outcome import Report
from modules.records import SystemDatabases
from sysassert.exceptions import ManifestError, MissingDependencyError
from utils.logger import log_debug, log_info

try:
    import yaml  # type: ignore
except ModuleNotFoundError as exc:  # pragma: no cover - runtime guard
    yaml = None  # type: ignore
    _YAML_IMPORT_ERROR = exc
else:  # pragma: no cover - exercised indirectly
    _YAML_IMPORT_ERROR = None


_SCALAR = {"anyOf": [{"type": "string"}, {"type": "integer"}]}
_BOOL = {"anyOf": [{"type": "boolean"}, {"type": "string", "enum": ["true", "false"]}]}

MANIFEST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["schema_version", "checks"],
    "properties": {
        "schema_version": {"type": "string", "pattern": r"^1\.\d+$"},
        "description": {"type": "string"},
        "checks": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["type"],
                "oneOf": [
                    {
                        "properties": {
                            "type": {"const": "user"},
                            "name": {"type": "string", "minLength": 1},
                            "exists": _BOOL,
                            "uid": _SCALAR,
                            "gid": _SCALAR,
                            "group": {"type": "string"},
                            "groups": {
                                "anyOf": [
                                    {"type": "string"},
                                    {"type": "array", "items": {"type": "string"}},
                                ]
                            },
                        },
                        "required": ["type", "name", "exists"],
                        "additionalProperties": False,
                    },
                    {
                        "properties": {
                            "type": {"const": "group"},
                            "name": {"type": "string", "minLength": 1},
                            "exists": _BOOL,
                            "gid": _SCALAR,
                        },
                        "required": ["type", "name", "exists"],
                        "additionalProperties": False,
                    },
                    {
                        "properties": {
                            "type": {"const": "package"},
                            "name": {"type": "string", "minLength": 1},
                            "installed": _BOOL,
                            "version": {"type": "string", "minLength": 1},
                        },
                        "required": ["type", "name", "installed"],
                        "additionalProperties": False,
                    },
                    {
                        "properties": {
                            "type": {"const": "file"},
                            "path": {"type": "string", "minLength": 1},
                            "exists": _BOOL,
                            "file_type": {"enum": list(file_check.FILE_TYPES)},
                        },
                        "required": ["type", "path", "exists"],
                        "additionalProperties": False,
                    },
                ],
            },
        },
    },
    "additionalProperties": False,
}


def _ensure_dependencies() -> None:
    if yaml is None:
        raise MissingDependencyError(
            package="PyYAML",
            import_name="yaml",
            instructions="pip install PyYAML",
            original=_YAML_IMPORT_ERROR,
        )


def load_manifest(path: str | Path) -> Dict[str, Any]:
    """Читает YAML-манифест и проверяет его по схеме.

    Raises:
        FileNotFoundError: Если файла нет.
        ManifestError: Если файл не читается, YAML некорректен или не
            соответствует схеме.
        MissingDependencyError: Если не установлен PyYAML.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Manifest not found: {p}")
    _ensure_dependencies()
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}  # type: ignore[union-attr]
    except yaml.YAMLError as e:  # type: ignore[union-attr]
        raise ManifestError(str(p), [f"YAML: {e}"]) from e
    except UnicodeDecodeError as e:
        raise ManifestError(str(p), [f"не UTF-8: {e}"]) from e
    except OSError as e:
        raise ManifestError(str(p), [f"не удаётся прочитать: {e}"]) from e

    ok, errors = validate_manifest(data)
    if not ok:
        raise ManifestError(str(p), errors)
    log_debug(f"Манифест {p}: {len(data['checks'])} проверок")
    return data


def validate_manifest(data: Any) -> Tuple[bool, List[str]]:
    """
    Валидирует манифест по JSON-схеме.
    Возвращает (is_valid, errors[]).
    """
    validator = Draft7Validator(MANIFEST_SCHEMA)
    errors: List[str] = []
    for err in sorted(validator.iter_errors(data), key=lambda e: list(e.path)):
        loc = " -> ".join([str(p) for p in err.path]) or "<root>"
        errors.append(f"{loc}: {err.message}")
    return (len(errors) == 0, errors)


def _text(value: Any) -> Optional[str]:
    """YAML-значение в строку в том виде, в каком его передал бы CLI."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def run_manifest(
    data: Dict[str, Any],
    *,
    databases: Optional[SystemDatabases] = None,
    manager: Optional[PackageManager] = None,
    runner: Optional[Runner] = None,
) -> Report:
    """Выполняет все проверки манифеста и сводит их в один отчёт.

    Любая жёсткая ошибка прерывает выполнение целиком.
    """
    dispatch: Dict[str, Callable[[Dict[str, Any]], Report]] = {
        "user": lambda c: user_check.check(
            c["name"],
            _text(c["exists"]),
            uid=_text(c.get("uid")),
            gid=_text(c.get("gid")),
            group=_text(c.get("group")),
            groups=_text(c.get("groups")),
            databases=databases,
        ),
        "group": lambda c: group_check.check(
            c["name"], _text(c["exists"]), gid=_text(c.get("gid")), databases=databases
        ),
        "package": lambda c: package_check.check(
            c["name"],
            _text(c["installed"]),
            version=_text(c.get("version")),
            manager=manager,
            runner=runner,
        ),
        "file": lambda c: file_check.check(
            c["path"], _text(c["exists"]), type_=c.get("file_type")
        ),
    }

    report = Report()
    for entry in data.get("checks", []):
        kind = entry["type"]
        log_info(f"Проверка {kind}: {entry.get('name') or entry.get('path')}")
        report.extend(dispatch[kind](entry))
    return report
