# modules/report_generator.py
from jinja2 import Environment, FileSystemLoader, select_autoescape
from datetime import datetime, date
from pathlib import Path
import json
import platform
import socket
from typing import Any, Dict
from xml.etree import ElementTree as ET

from modules.os_detect import detect_package_manager, read_os_release
from modules.outcome import Report, UnitError

import sysassert

TEMPLATES_DIR = Path(sysassert.__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "report.html.j2"


def collect_host_metadata() -> dict:
    """Сведения о хосте, на котором выполнялись проверки."""
    os_release = read_os_release()
    return {
        "hostname": socket.gethostname(),
        "platform": platform.platform(),
        "os": os_release.get("PRETTY_NAME") or os_release.get("NAME", ""),
        "package_manager": detect_package_manager().value,
        "generated_at": datetime.now().isoformat(timespec="seconds"),
        "tool_version": sysassert.__version__,
    }


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, set):
        return sorted(value)
    return str(value)


def report_to_dict(report: Report, host_info: dict | None = None) -> Dict[str, Any]:
    payload = report.to_dict()
    payload["ok"] = report.ok
    if host_info is not None:
        payload["host"] = host_info
    return payload


def report_to_json(report: Report, host_info: dict | None = None) -> str:
    return json.dumps(report_to_dict(report, host_info), indent=2, ensure_ascii=False, default=_json_default)


def generate_json_report(report: Report, output_path: str, host_info: dict | None = None):
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(report_to_json(report, host_info))
        f.write("\n")


def generate_junit_report(report: Report, output_path: str, suite_name: str = "sysassert"):
    suite = ET.Element(
        "testsuite",
        {
            "name": suite_name,
            "tests": str(len(report)),
            "failures": str(report.error),
            "errors": "0",
            "skipped": "0",
        },
    )
    for outcome in report:
        case = ET.SubElement(
            suite,
            "testcase",
            {"classname": outcome.test.split(" - ", 1)[0], "name": outcome.test},
        )
        if isinstance(outcome, UnitError):
            failure = ET.SubElement(case, "failure", {"message": outcome.message})
            failure.text = f"expected: {outcome.expected}\nactual: {outcome.actual}"
        else:
            system_out = ET.SubElement(case, "system-out")
            system_out.text = f"expected: {outcome.expected}"

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    ET.ElementTree(suite).write(output_path, encoding="utf-8", xml_declaration=True)


def generate_html_report(
    report: Report,
    output_path: str,
    host_info: dict | None = None,
    template_name: str = DEFAULT_TEMPLATE,
):
    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(["html", "xml", "j2"]))
    template = env.get_template(template_name)

    rendered = template.render(
        report=report,
        outcomes=[outcome.to_dict() for outcome in report],
        host=host_info or {},
        date=datetime.now().strftime("%Y-%m-%d %H:%M"),
        total_count=len(report),
        pass_count=report.success,
        fail_count=report.error,
    )

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(rendered)


def write_report(report: Report, output_path: str, host_info: dict | None = None):
    """Выбирает формат экспорта по расширению файла."""
    suffix = Path(output_path).suffix.lower()
    if suffix == ".xml":
        generate_junit_report(report, output_path)
    elif suffix in (".html", ".htm"):
        generate_html_report(report, output_path, host_info=host_info)
    else:
        generate_json_report(report, output_path, host_info=host_info)
