# modules/cli.py
import argparse
import os
import sys
from typing import List

from modules.file import FILE_TYPES

BOOL_CHOICES = ("true", "false")


def _add_exists_argument(subparser: argparse.ArgumentParser, flag: str = "--exists") -> None:
    # Строгая проверка значения выполняется в модулях проверок (код 2).
    subparser.add_argument(
        flag,
        required=True,
        metavar="{true,false}",
        help="Ожидаемое наличие: true или false.",
    )


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """
    Разбирает аргументы командной строки.

    Примеры:
      sysassert user root --exists true --uid 0
      sysassert group docker --exists true --gid 999
      sysassert package openssl --installed true --version 1.0.2
      sysassert --format json run checks.yml
    """

    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="sysassert",
        description="sysassert — проверка состояния системы: пользователи, группы, пакеты, файлы.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Отладочный вывод.",
    )
    parser.add_argument(
        "--log-file",
        default=os.environ.get("SYSASSERT_LOG_FILE"),
        help="Дописывать журнал в файл (можно задать через SYSASSERT_LOG_FILE).",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Формат вывода отчёта в консоль (по умолчанию: text).",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Сохранить отчёт в файл: .json, .xml (JUnit) или .html.",
    )
    parser.add_argument(
        "--passwd-file",
        default=os.environ.get("SYSASSERT_PASSWD_FILE", "/etc/passwd"),
        help="База учётных записей (SYSASSERT_PASSWD_FILE, по умолчанию /etc/passwd).",
    )
    parser.add_argument(
        "--group-file",
        default=os.environ.get("SYSASSERT_GROUP_FILE", "/etc/group"),
        help="База групп (SYSASSERT_GROUP_FILE, по умолчанию /etc/group).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=float(os.environ.get("SYSASSERT_COMMAND_TIMEOUT", "0") or 0),
        help="Таймаут запроса к пакетному менеджеру в секундах (0 — без ограничения).",
    )

    subs = parser.add_subparsers(dest="command", required=False, help="Доступные команды")

    sub_user = subs.add_parser("user", help="Проверить учётную запись")
    sub_user.add_argument("name", help="Имя пользователя")
    _add_exists_argument(sub_user)
    sub_user.add_argument("--uid", help="Ожидаемый UID")
    sub_user.add_argument("--gid", help="Ожидаемый GID")
    sub_user.add_argument("--group", help="Ожидаемая основная группа")
    sub_user.add_argument(
        "--groups",
        help="Ожидаемые дополнительные группы через запятую (порядок не важен)",
    )

    sub_group = subs.add_parser("group", help="Проверить группу")
    sub_group.add_argument("name", help="Имя группы")
    _add_exists_argument(sub_group)
    sub_group.add_argument("--gid", help="Ожидаемый GID")

    sub_package = subs.add_parser("package", help="Проверить пакет")
    sub_package.add_argument("name", help="Имя пакета")
    _add_exists_argument(sub_package, "--installed")
    sub_package.add_argument("--version", help="Точная ожидаемая версия")

    sub_file = subs.add_parser("file", help="Проверить файл или каталог")
    sub_file.add_argument("path", help="Путь")
    _add_exists_argument(sub_file)
    sub_file.add_argument(
        "--type",
        dest="file_type",
        choices=list(FILE_TYPES),
        help="Ожидаемый тип пути",
    )

    sub_run = subs.add_parser("run", help="Выполнить проверки из YAML-манифеста")
    sub_run.add_argument("manifest", help="Путь к манифесту")

    sub_validate = subs.add_parser("validate", help="Проверить манифест на ошибки")
    sub_validate.add_argument("manifest", help="Путь к манифесту")

    args = parser.parse_args(argv)

    if getattr(args, "command", None) is None:
        parser.print_help()
        sys.exit(2)
    if args.timeout < 0:
        parser.error("--timeout не может быть отрицательным")
    return args
