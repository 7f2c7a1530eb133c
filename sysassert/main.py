# sysassert/main.py
from functools import partial
from pathlib import Path
import sys

from modules.cli import parse_args
from modules import file as file_check
from modules import group as group_check
from modules import package as package_check
from modules import user as user_check
from modules.command_executor import run_command
from modules.manifest import load_manifest, run_manifest
from modules.outcome import Report, UnitError
from modules.records import SystemDatabases
from modules.report_generator import collect_host_metadata, report_to_json, write_report
from sysassert.exceptions import CheckError, ManifestError, MissingDependencyError
from utils.logger import (
    configure_logging,
    log_critical,
    log_debug,
    log_fail,
    log_info,
    log_pass,
    log_section,
)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_SYSTEM_ERROR = 2


def exit_code_for(report: Report) -> int:
    """0 — все проверки успешны, 1 — есть хотя бы одна ошибка."""
    return EXIT_OK if report.error == 0 else EXIT_FAILED


def _run_command(args) -> Report:
    databases = SystemDatabases(passwd=Path(args.passwd_file), group=Path(args.group_file))
    runner = partial(run_command, timeout=args.timeout or None)

    if args.command == "user":
        return user_check.check(
            args.name,
            args.exists,
            uid=args.uid,
            gid=args.gid,
            group=args.group,
            groups=args.groups,
            databases=databases,
        )
    if args.command == "group":
        return group_check.check(args.name, args.exists, gid=args.gid, databases=databases)
    if args.command == "package":
        return package_check.check(args.name, args.installed, version=args.version, runner=runner)
    if args.command == "file":
        return file_check.check(args.path, args.exists, type_=args.file_type)
    if args.command == "run":
        manifest = load_manifest(args.manifest)
        return run_manifest(manifest, databases=databases, runner=runner)
    raise ValueError(f"Неизвестная команда: {args.command}")


def _print_report(report: Report) -> None:
    log_section("Результаты проверок")
    for outcome in report:
        if isinstance(outcome, UnitError):
            log_fail(
                f"{outcome.test}: {outcome.message} "
                f"(ожидалось: {outcome.expected}, фактически: {outcome.actual})"
            )
        else:
            log_pass(f"{outcome.test}: {outcome.expected}")
    summary = f"Успешно: {report.success}, ошибок: {report.error}"
    if report.ok:
        log_info(f"Все проверки пройдены. {summary}")
    else:
        log_info(f"Есть непройденные проверки. {summary}")


def main():
    try:
        args = parse_args()
    except SystemExit:
        raise
    except Exception as exc:
        log_critical(f"Ошибка парсинга аргументов: {exc}")
        sys.exit(EXIT_SYSTEM_ERROR)

    as_json = args.format == "json"
    configure_logging(log_file=args.log_file, verbose=args.verbose, quiet=as_json)
    log_debug(f"Команда: {args.command}")

    if args.command == "validate":
        try:
            load_manifest(args.manifest)
        except (ManifestError, FileNotFoundError, MissingDependencyError) as exc:
            log_critical(str(exc))
            sys.exit(EXIT_SYSTEM_ERROR)
        print("OK: Манифест соответствует схеме.")
        return

    try:
        report = _run_command(args)
    except CheckError as exc:
        log_critical(f"Системная ошибка: {exc}")
        sys.exit(EXIT_SYSTEM_ERROR)
    except ManifestError as exc:
        log_critical(str(exc))
        for err in exc.errors:
            log_critical(f"  - {err}")
        sys.exit(EXIT_SYSTEM_ERROR)
    except FileNotFoundError as exc:
        log_critical(f"Файл не найден: {exc}")
        sys.exit(EXIT_SYSTEM_ERROR)
    except MissingDependencyError as exc:
        log_critical(f"Отсутствует зависимость: {exc}")
        sys.exit(EXIT_SYSTEM_ERROR)

    if as_json:
        print(report_to_json(report))
    else:
        _print_report(report)

    if args.output:
        try:
            write_report(report, args.output, host_info=collect_host_metadata())
        except OSError as exc:
            log_critical(f"Не удалось сохранить отчёт {args.output}: {exc}")
            sys.exit(EXIT_SYSTEM_ERROR)
        log_info(f"Отчёт сохранён: {args.output}")

    sys.exit(exit_code_for(report))


if __name__ == "__main__":
    main()
